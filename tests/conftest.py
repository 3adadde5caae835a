import sys
from pathlib import Path

import pytest
import torch
import torch.nn as nn

sys.path.insert(0, str(Path(__file__).parent.parent))

NUM_LABELS = 5


class TinyTagger(nn.Module):
    def __init__(self, vocab_size: int = 32, hidden_size: int = 4):
        super().__init__()
        self.embed = nn.Embedding(vocab_size, hidden_size)
        self.head = nn.Linear(hidden_size, NUM_LABELS)

    def forward(
        self,
        input_ids: torch.Tensor,
        attention_mask: torch.Tensor,
        token_type_ids: torch.Tensor,
    ):
        hidden = self.embed(input_ids + token_type_ids)
        hidden = hidden * attention_mask.unsqueeze(-1).to(hidden.dtype)
        return (self.head(hidden),)


@pytest.fixture
def num_labels():
    return NUM_LABELS


@pytest.fixture
def model_root(tmp_path):
    """A models/<name>/<name>.pt tree holding a scripted TinyTagger."""
    model_dir = tmp_path / "models" / "tiny"
    model_dir.mkdir(parents=True)
    torch.jit.save(torch.jit.script(TinyTagger()), str(model_dir / "tiny.pt"))
    return tmp_path
