import logging
from pathlib import Path
from typing import List, Optional, Sequence, Union

import torch

from runtime.device import Device
from .translator import IdentityTranslator

LOGGER = logging.getLogger("torchscript_demo.models")


class TorchScriptModel:
    def __init__(self, module: torch.jit.ScriptModule, device: Device):
        self.device = device
        self._module: Optional[torch.jit.ScriptModule] = module

    @classmethod
    def load(cls, model_path: Union[str, Path], device: Device) -> "TorchScriptModel":
        # map_location remaps saved weights and constants onto the chosen device
        module = torch.jit.load(str(model_path), map_location=device.to_torch())
        module.eval()
        LOGGER.info("Loaded %s on %s", model_path, device)
        return cls(module, device)

    @property
    def module(self) -> torch.jit.ScriptModule:
        if self._module is None:
            raise RuntimeError("model has been closed")
        return self._module

    @property
    def closed(self) -> bool:
        return self._module is None

    def new_predictor(self, translator: Optional[IdentityTranslator] = None) -> "Predictor":
        return Predictor(self, translator or IdentityTranslator())

    def close(self) -> None:
        if self._module is None:
            return
        self._module = None
        if self.device.is_gpu and torch.cuda.is_available():
            torch.cuda.empty_cache()
        LOGGER.debug("Released model on %s", self.device)

    def __enter__(self) -> "TorchScriptModel":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


class Predictor:
    def __init__(self, model: TorchScriptModel, translator: IdentityTranslator):
        self.model = model
        self.translator = translator
        self._closed = False

    def predict(self, inputs: Sequence[torch.Tensor]) -> List[torch.Tensor]:
        if self._closed:
            raise RuntimeError("predictor has been closed")
        args = self.translator.process_input(inputs)
        with torch.no_grad():
            output = self.model.module(*args)
        return self.translator.process_output(output)

    def close(self) -> None:
        self._closed = True

    def __enter__(self) -> "Predictor":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
