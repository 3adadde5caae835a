import torch
from typing import Any, List, Sequence, Tuple


class IdentityTranslator:
    """Pass a tensor list straight through to a TorchScript module and back."""

    def process_input(self, inputs: Sequence[torch.Tensor]) -> Tuple[torch.Tensor, ...]:
        return tuple(inputs)

    def process_output(self, output: Any) -> List[torch.Tensor]:
        tensors: List[torch.Tensor] = []
        _collect_tensors(output, tensors)
        return tensors


def _collect_tensors(value: Any, out: List[torch.Tensor]) -> None:
    if isinstance(value, torch.Tensor):
        out.append(value)
    elif isinstance(value, dict):
        for item in value.values():
            _collect_tensors(item, out)
    elif isinstance(value, (list, tuple)):
        for item in value:
            _collect_tensors(item, out)
