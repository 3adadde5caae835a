from typing import Dict, List, Union
from pathlib import Path

from transformers import AutoTokenizer


class Tokenizer:
    def __init__(self, model_dir: Union[str, Path]):
        self._tokenizer = AutoTokenizer.from_pretrained(str(model_dir))

    def encode_for_model(self, text: str, max_length: int) -> Dict[str, List[int]]:
        encoded = self._tokenizer(
            text,
            padding="max_length",
            truncation=True,
            max_length=max_length,
        )
        input_ids = list(encoded["input_ids"])
        return {
            "input_ids": input_ids,
            "attention_mask": list(encoded.get("attention_mask", [1] * len(input_ids))),
            "token_type_ids": list(encoded.get("token_type_ids", [0] * len(input_ids))),
        }
