"""TQDM implementation of the ProgressReporter port."""

from typing import Optional

from tqdm import tqdm

from ..application.domain import ProgressReporter


class TqdmProgressReporter(ProgressReporter):
    """Shows one byte-scaled progress bar per transfer."""

    def __init__(self, disable: bool = False):
        self.disable = disable
        self._bar: Optional[tqdm] = None

    def total_size_is(self, uri: str, size: Optional[int]):
        self.finished(uri)
        self._bar = tqdm(
            total=size,
            unit="B",
            unit_scale=True,
            desc=uri.rsplit("/", 1)[-1] or uri,
            disable=self.disable,
        )

    def downloaded_size_is(self, uri: str, size: int):
        if self._bar is not None:
            self._bar.update(size - self._bar.n)

    def finished(self, uri: str):
        if self._bar is not None:
            self._bar.close()
            self._bar = None
