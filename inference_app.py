import logging
import os
import sys
from typing import List, Mapping, Optional, Sequence

import torch

from models.torchscript_model import TorchScriptModel
from runtime.config import InferenceConfig
from runtime.device import Device, select_device
from runtime.inputs import build_dummy_inputs, build_text_inputs
from runtime.tokenizer import Tokenizer

LOGGER = logging.getLogger("torchscript_demo.app")

LOG_LEVEL_ENV = "LOG_LEVEL"
EXIT_MODEL_NOT_FOUND = 2


class InferenceApp:
    def __init__(self, config: InferenceConfig, device: Device):
        self.config = config
        self.device = device

    def build_inputs(self) -> List[torch.Tensor]:
        if self.config.text is not None:
            tokenizer = Tokenizer(self.config.model_dir)
            return build_text_inputs(tokenizer, self.config.text, self.config.seq_len, self.device)
        return build_dummy_inputs(self.config.seq_len, self.device)

    def run(self) -> List[torch.Tensor]:
        with TorchScriptModel.load(self.config.model_path, self.device) as model, \
                model.new_predictor() as predictor:
            inputs = self.build_inputs()
            LOGGER.debug("Running forward pass with seq_len=%d", self.config.seq_len)
            return predictor.predict(inputs)


def format_shape(outputs: Sequence[torch.Tensor]) -> str:
    if not outputs:
        return "-"
    return str(tuple(outputs[0].shape))


def report_missing_model(config: InferenceConfig) -> None:
    print(f"Model file not found: {config.model_path.absolute()}", file=sys.stderr)
    print(f"Expected structure: models/{config.model_name}/{config.model_file}", file=sys.stderr)
    print("Override with --model-name=NAME --model-file=FILE or --model-dir=DIR", file=sys.stderr)


def resolve_log_level(overrides: Mapping[str, str]) -> int:
    level = logging.getLevelName(overrides.get(LOG_LEVEL_ENV, "INFO").upper())
    if not isinstance(level, int):
        return logging.INFO
    return level


def main(
    argv: Optional[Sequence[str]] = None,
    overrides: Optional[Mapping[str, str]] = None,
) -> int:
    if argv is None:
        argv = sys.argv[1:]
    if overrides is None:
        overrides = os.environ

    logging.basicConfig(
        level=resolve_log_level(overrides),
        format="[%(levelname)s] %(message)s",
    )

    config = InferenceConfig.from_args(argv, overrides)
    device = select_device(config)

    if not config.model_path.exists():
        report_missing_model(config)
        return EXIT_MODEL_NOT_FOUND

    print(f"Using device: {device}")
    print(f"Loading model: {config.model_path.absolute()}")

    outputs = InferenceApp(config, device).run()
    print(
        f"Inference success on {device}. Output list size: {len(outputs)}; "
        f"first output shape: {format_shape(outputs)}"
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
