from .config import InferenceConfig
from .device import Device, cuda_device_count, select_device
from .inputs import build_dummy_inputs, build_text_inputs
from .tokenizer import Tokenizer

__all__ = [
    "Device",
    "InferenceConfig",
    "Tokenizer",
    "build_dummy_inputs",
    "build_text_inputs",
    "cuda_device_count",
    "select_device",
]
