from .torchscript_model import Predictor, TorchScriptModel
from .translator import IdentityTranslator

__all__ = ["IdentityTranslator", "Predictor", "TorchScriptModel"]
