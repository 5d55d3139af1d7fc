"""
Pydantic models for validating the build configuration section of settings.

Known options are explicit, typed fields. Anything else found in the
configuration is kept apart in `extras` so templates can still reach it
without it being mistaken for a recognized option.
"""

from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..application.domain import ArchiveCoordinate
from ..application.exceptions import ConfigurationError

APPENDED_OPTIONS = ("include_packages", "tasks")


class BuildConfiguration(BaseModel):
    """The options describing one installer image build."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    architecture: str = "i386"
    include_packages: List[str] = Field(
        default_factory=lambda: ["linux-server", "language-support-en", "grub"]
    )
    install_packages: List[str] = Field(default_factory=list)
    label: str = "Ubuntu"
    output_directory: str = "."
    post_install_commands: List[str] = Field(default_factory=list)
    repositories: List[str] = Field(
        default_factory=lambda: [
            "http://us.archive.ubuntu.com/ubuntu jaunty main restricted"
        ]
    )
    tasks: List[str] = Field(default_factory=lambda: ["minimal", "standard"])
    tag: str = "captain"
    version: str = "9.04"
    working_directory: Optional[str] = None
    auto_install: bool = True
    extras: Dict[str, Any] = Field(default_factory=dict)

    @field_validator("include_packages", "tasks")
    @classmethod
    def _unique(cls, values: List[str]) -> List[str]:
        return list(dict.fromkeys(values))

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "BuildConfiguration":
        """
        Validates known options and sets unrecognized keys aside in extras.

        Configured include_packages and tasks are appended to the defaults
        rather than replacing them.
        """
        known = {name for name in cls.model_fields if name != "extras"}
        options = {k: v for k, v in data.items() if k in known}
        extras = {k: v for k, v in data.items() if k not in known}

        for name in APPENDED_OPTIONS:
            if name in options:
                added = options[name]
                if isinstance(added, str):
                    added = [added]
                default = cls.model_fields[name].get_default(call_default_factory=True)
                options[name] = [*default, *added]

        return cls(**options, extras=extras)

    def _repository_fields(self, repository: str) -> List[str]:
        fields = repository.split()
        if len(fields) < 3:
            raise ConfigurationError(
                f"Repository {repository!r} must read '<mirror> <codename> "
                f"<component>...'"
            )
        return fields

    def installer_repository_mirror_and_codename(self) -> Tuple[str, str]:
        """The installer is fetched from the first configured repository."""
        if not self.repositories:
            raise ConfigurationError("At least one repository must be configured")
        mirror, codename = self._repository_fields(self.repositories[0])[:2]
        return mirror, codename

    def archive_coordinates(self) -> List[ArchiveCoordinate]:
        """One coordinate per component of every configured repository."""
        coordinates = []
        for repository in self.repositories:
            mirror, codename, *components = self._repository_fields(repository)
            coordinates.extend(
                ArchiveCoordinate(
                    mirror=mirror,
                    codename=codename,
                    architecture=self.architecture,
                    component=component,
                )
                for component in components
            )
        return coordinates

    @property
    def iso_image_name(self) -> str:
        return f"{self.label} {self.version} {self.tag.capitalize()}"

    @property
    def iso_image_path(self) -> Path:
        basename = f"{self.label}-{self.version}-{self.tag}-{self.architecture}.iso"
        return Path(self.output_directory) / basename.lower()
