"""
Dependency Injection container for the captain component.

This container uses the `dependency-injector` library to wire together the
fetch layer, such as the HTTP client, the persistent cache and the index
resolver, based on the application's configuration.
"""

from dependency_injector import containers, providers
import httpx

from ..application.domain import ResourceResolver
from ..application.service import ArchiveService
from ..log import setup_logging
from ..settings import settings

from .cache import PersistentCache
from .config_models import BuildConfiguration
from .index_resolver import ArchiveIndexResolver
from .progress import TqdmProgressReporter


class Container(containers.DeclarativeContainer):
    """DI container for wiring the application components."""

    config = providers.Object(settings)

    logging = providers.Resource(
        setup_logging,
        level=config().logging.level,
    )

    http_client = providers.Singleton(httpx.Client, follow_redirects=True)

    cache = providers.Singleton(
        PersistentCache,
        root=config().fetch.cache_root,
    )

    progress_reporter = providers.Singleton(
        TqdmProgressReporter,
        disable=not config().fetch.show_progress,
    )

    resolver: providers.Factory[ResourceResolver] = providers.Factory(
        ArchiveIndexResolver,
        client=http_client,
        cache=cache,
        reporter=progress_reporter,
        timeout=config().fetch.timeout,
    )

    archive_service = providers.Factory(
        ArchiveService,
        resolver=resolver,
    )

    build_configuration = providers.Singleton(
        BuildConfiguration.from_mapping,
        config().get("build", {}),
    )
