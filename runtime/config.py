import re
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional, Sequence

DEFAULT_MODEL_NAME = "OpenMed-NER-ChemicalDetect-ModernMed-149M"
DEFAULT_SEQ_LEN = 16
MODEL_EXT = ".pt"
MODELS_ROOT = "models"

MODEL_FILE_ENV = "MODEL_FILE"
SEQ_LEN_ENV = "SEQ_LEN"

DEVICE_TOKENS = ("cpu", "gpu", "auto")

_INT_PATTERN = re.compile(r"[+-]?[0-9]+")
_INT_MIN, _INT_MAX = -(2 ** 31), 2 ** 31 - 1


def _parse_int(value: str) -> Optional[int]:
    # Plain signed 32-bit decimal only: no whitespace, underscores or overflow
    if not _INT_PATTERN.fullmatch(value):
        return None
    parsed = int(value)
    if not _INT_MIN <= parsed <= _INT_MAX:
        return None
    return parsed


def _parse_seq_len(value: str) -> Optional[int]:
    seq_len = _parse_int(value)
    if seq_len is None or seq_len < 1:
        return None
    return seq_len


def default_model_dir(model_name: str) -> str:
    return str(Path(MODELS_ROOT) / model_name)


def default_model_file(model_name: str) -> str:
    return model_name + MODEL_EXT


@dataclass(frozen=True)
class InferenceConfig:
    device: str = "auto"  # cpu | gpu | cuda | auto
    gpu_index: int = 0  # Preferred GPU, clamped when the device is selected
    model_name: str = DEFAULT_MODEL_NAME
    model_dir: str = default_model_dir(DEFAULT_MODEL_NAME)
    model_file: str = default_model_file(DEFAULT_MODEL_NAME)
    model_file_overridden: bool = False  # Set by --model-file or MODEL_FILE
    seq_len: int = DEFAULT_SEQ_LEN
    text: Optional[str] = None  # Tokenize this instead of the synthetic input

    def __post_init__(self):
        if not self.model_name:
            raise ValueError("model_name must be non-empty")
        if self.seq_len < 1:
            raise ValueError("seq_len must be >= 1")

    @property
    def model_path(self) -> Path:
        return Path(self.model_dir) / self.model_file

    @classmethod
    def from_args(
        cls,
        args: Optional[Sequence[str]],
        overrides: Optional[Mapping[str, str]] = None,
    ) -> "InferenceConfig":
        """Resolve a config from CLI tokens, left to right.

        Unknown tokens and malformed integers are ignored and the previous
        value is kept. ``overrides`` is consulted once, before any token:
        ``MODEL_FILE`` pins the artifact filename and ``SEQ_LEN`` replaces the
        default sequence length.
        """
        overrides = overrides or {}

        device = "auto"
        gpu_index = 0
        model_name = DEFAULT_MODEL_NAME
        model_dir = default_model_dir(model_name)
        model_file = default_model_file(model_name)
        model_file_overridden = False
        seq_len = _parse_seq_len(overrides.get(SEQ_LEN_ENV, "")) or DEFAULT_SEQ_LEN
        text = None

        override_file = overrides.get(MODEL_FILE_ENV)
        if override_file is not None and override_file.strip():
            model_file = override_file
            model_file_overridden = True

        for arg in args or ():
            lowered = arg.lower()
            if arg.startswith("--device="):
                device = arg[len("--device="):]
            elif arg.startswith("--gpu-index="):
                parsed = _parse_int(arg[len("--gpu-index="):])
                if parsed is not None:
                    gpu_index = parsed
            elif arg.startswith("--model-name="):
                name = arg[len("--model-name="):]
                if not name:
                    continue
                model_name = name
                model_dir = default_model_dir(name)
                if not model_file_overridden:
                    model_file = default_model_file(name)
            elif arg.startswith("--model-dir="):
                model_dir = arg[len("--model-dir="):]
            elif arg.startswith("--model-file="):
                model_file = arg[len("--model-file="):]
                model_file_overridden = True
            elif arg.startswith("--seq-len="):
                parsed = _parse_seq_len(arg[len("--seq-len="):])
                if parsed is not None:
                    seq_len = parsed
            elif arg.startswith("--text="):
                text = arg[len("--text="):]
            elif lowered.startswith("gpu:"):
                device = "gpu"
                parsed = _parse_int(arg[len("gpu:"):])
                if parsed is not None:
                    gpu_index = parsed
            elif lowered in DEVICE_TOKENS:
                device = lowered

        return cls(
            device=device,
            gpu_index=gpu_index,
            model_name=model_name,
            model_dir=model_dir,
            model_file=model_file,
            model_file_overridden=model_file_overridden,
            seq_len=seq_len,
            text=text,
        )
