"""Frame source adapter for external byte providers (camera SDKs)."""

import logging
from typing import Callable, Optional

import numpy as np

from monoview.errors import SourceUnderflowError
from monoview.sources.base import FrameSource, as_sample_array
from monoview.sources.frame import Frame

logger = logging.getLogger(__name__)

# Returns the raw bytes of one frame, or None once the device has stopped.
FrameProvider = Callable[[], Optional[object]]


class CallbackFrameSource(FrameSource):
    """Live frame source fed by a callable that returns raw frame bytes.

    Wraps anything shaped like a camera SDK's "get data" call: the
    provider returns a bytes-like object (``bytes``, ``memoryview``, numpy
    array...) holding at least ``width * height`` monochrome samples, or
    ``None`` when no more frames will arrive.  The first
    ``width * height`` bytes are copied into the source's own buffer;
    anything beyond that is ignored.

    Args:
        width: Frame width in pixels.
        height: Frame height in pixels.
        provider: Zero-argument callable returning one frame's bytes.
        name: Identifier used in logs and :attr:`Frame.source_name`.
    """

    def __init__(
        self,
        width: int,
        height: int,
        provider: FrameProvider,
        name: str = "callback",
    ):
        super().__init__(width, height)
        self._provider = provider
        self._name = name

    def fill(self, buffer, width: int, height: int) -> None:
        data = self._provider()
        if data is None:
            raise SourceUnderflowError(
                f"{self.source_name}: provider returned no data"
            )
        self._copy_into(data, buffer, width, height)

    def read(self) -> Optional[Frame]:
        if not self.is_open:
            return None
        data = self._provider()
        if data is None:
            logger.info("%s: provider exhausted", self.source_name)
            return None
        self._copy_into(data, self._buffer, self._width, self._height)
        return self._emit()

    @staticmethod
    def _copy_into(data, buffer, width: int, height: int) -> None:
        target = as_sample_array(buffer, width, height)
        if isinstance(data, np.ndarray):
            incoming = data.reshape(-1).view(np.uint8)
        else:
            incoming = np.frombuffer(memoryview(data), dtype=np.uint8)
        if incoming.size < target.size:
            raise SourceUnderflowError(
                f"Provider supplied {incoming.size} bytes, "
                f"{width}x{height} frame needs {target.size}"
            )
        np.copyto(target, incoming[:target.size])

    @property
    def source_name(self) -> str:
        return f"{self._name}:{self._width}x{self._height}"

    @property
    def is_live(self) -> bool:
        return True
