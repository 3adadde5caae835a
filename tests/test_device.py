import sys
from pathlib import Path

import pytest
import torch

sys.path.insert(0, str(Path(__file__).parent.parent))
from runtime.config import InferenceConfig
from runtime.device import Device, select_device


def _no_query():
    raise AssertionError("GPU count should not be queried")


def _broken_query():
    raise RuntimeError("CUDA driver not initialized")


def test_device_equality_and_str():
    assert Device.cpu() == Device.cpu()
    assert Device.gpu(1) == Device.gpu(1)
    assert Device.gpu(0) != Device.gpu(1)
    assert Device.gpu(0) != Device.cpu()
    assert str(Device.cpu()) == "cpu()"
    assert str(Device.gpu(1)) == "gpu(1)"


def test_to_torch():
    assert Device.cpu().to_torch() == torch.device("cpu")
    assert Device.gpu(2).to_torch() == torch.device("cuda", 2)


@pytest.mark.parametrize("args", [["cpu"], ["gpu:1", "cpu"], ["--device=CPU"]])
def test_cpu_is_unconditional(args):
    cfg = InferenceConfig.from_args(args)
    assert select_device(cfg, gpu_count=lambda: 4) == Device.cpu()


def test_explicit_gpu_skips_availability_check():
    cfg = InferenceConfig.from_args(["gpu:1"])
    device = select_device(cfg, gpu_count=_no_query)
    assert device == Device.gpu(1)
    assert str(device) == "gpu(1)"


@pytest.mark.parametrize("value", ["gpu", "cuda", "CUDA"])
def test_explicit_gpu_aliases(value):
    cfg = InferenceConfig.from_args([f"--device={value}", "--gpu-index=3"])
    assert select_device(cfg, gpu_count=_no_query) == Device.gpu(3)


def test_explicit_gpu_negative_index_clamped_to_zero():
    cfg = InferenceConfig.from_args(["--device=gpu", "--gpu-index=-2"])
    assert select_device(cfg, gpu_count=_no_query) == Device.gpu(0)


def test_auto_without_gpus_is_cpu():
    cfg = InferenceConfig.from_args(["auto"])
    assert select_device(cfg, gpu_count=lambda: 0) == Device.cpu()


def test_auto_clamps_index_to_available_gpus():
    cfg = InferenceConfig.from_args(["auto", "--gpu-index=5"])
    assert select_device(cfg, gpu_count=lambda: 3) == Device.gpu(2)


def test_auto_negative_index_clamped_to_zero():
    cfg = InferenceConfig.from_args(["--gpu-index=-1"])
    assert select_device(cfg, gpu_count=lambda: 2) == Device.gpu(0)


def test_auto_query_failure_falls_back_to_cpu():
    cfg = InferenceConfig.from_args([])
    assert select_device(cfg, gpu_count=_broken_query) == Device.cpu()


def test_unknown_device_behaves_like_auto():
    cfg = InferenceConfig.from_args(["--device=tpu", "--gpu-index=1"])
    assert select_device(cfg, gpu_count=lambda: 2) == Device.gpu(1)
    assert select_device(cfg, gpu_count=lambda: 0) == Device.cpu()


def test_default_collaborator_uses_torch(monkeypatch):
    monkeypatch.setattr(torch.cuda, "device_count", lambda: 0)
    assert select_device(InferenceConfig()) == Device.cpu()
