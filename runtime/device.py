import logging
from dataclasses import dataclass
from typing import Callable

import torch

from .config import InferenceConfig

LOGGER = logging.getLogger("torchscript_demo.runtime.device")

CPU = "cpu"
GPU = "gpu"


@dataclass(frozen=True)
class Device:
    kind: str
    index: int = 0

    @classmethod
    def cpu(cls) -> "Device":
        return cls(CPU, 0)

    @classmethod
    def gpu(cls, index: int = 0) -> "Device":
        return cls(GPU, index)

    @property
    def is_gpu(self) -> bool:
        return self.kind == GPU

    def to_torch(self) -> torch.device:
        if self.is_gpu:
            return torch.device("cuda", self.index)
        return torch.device("cpu")

    def __str__(self) -> str:
        if self.is_gpu:
            return f"gpu({self.index})"
        return "cpu()"


def cuda_device_count() -> int:
    return torch.cuda.device_count()


def select_device(
    config: InferenceConfig,
    gpu_count: Callable[[], int] = cuda_device_count,
) -> Device:
    """Map the requested device class onto a concrete device.

    An explicit ``gpu``/``cuda`` request is honoured without checking that the
    GPU exists. ``auto`` (and any unknown value) asks ``gpu_count`` and falls
    back to the CPU when it reports nothing or fails.
    """
    requested = config.device.lower()
    if requested == "cpu":
        return Device.cpu()
    if requested in ("gpu", "cuda"):
        return Device.gpu(max(0, config.gpu_index))

    try:
        count = gpu_count()
    except Exception as exc:
        LOGGER.debug("GPU count query failed, assuming no GPUs: %s", exc)
        count = 0

    if count > 0:
        return Device.gpu(max(0, min(config.gpu_index, count - 1)))
    return Device.cpu()
