import torch
from typing import List

from .device import Device
from .tokenizer import Tokenizer

INPUT_NAMES = ("input_ids", "attention_mask", "token_type_ids")


def build_dummy_inputs(seq_len: int, device: Device) -> List[torch.Tensor]:
    target = device.to_torch()
    shape = (1, seq_len)
    input_ids = torch.zeros(shape, dtype=torch.int64, device=target)
    attention_mask = torch.ones(shape, dtype=torch.int64, device=target)
    token_type_ids = torch.zeros(shape, dtype=torch.int64, device=target)
    return [input_ids, attention_mask, token_type_ids]


def build_text_inputs(
    tokenizer: Tokenizer,
    text: str,
    seq_len: int,
    device: Device,
) -> List[torch.Tensor]:
    encoded = tokenizer.encode_for_model(text, max_length=seq_len)
    target = device.to_torch()
    return [
        torch.tensor([encoded[name]], dtype=torch.int64, device=target)
        for name in INPUT_NAMES
    ]
