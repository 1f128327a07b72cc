import pytest

from camtrack.models import (
    DEFAULT_MODEL,
    ModelError,
    load_model,
    model_display_name,
    model_loaded_message,
    resolve_model_path,
)


def test_resolve_existing_path(tmp_path):
    model = tmp_path / "custom.onnx"
    model.write_bytes(b"x")
    assert resolve_model_path(model) == str(model)


def test_resolve_missing_path_falls_back(tmp_path):
    assert resolve_model_path(tmp_path / "missing.onnx") == "yolov8n.onnx"
    assert resolve_model_path(tmp_path / "missing.onnx", "other.onnx") == "other.onnx"


def test_display_name_is_file_name(tmp_path):
    assert model_display_name(tmp_path / "custom.onnx") == "custom.onnx"


def test_load_model_uses_existing_path(tmp_path):
    model = tmp_path / "custom.onnx"
    model.write_bytes(b"x")
    calls = []

    def loader(p):
        calls.append(p)
        return ("model", p)

    loaded, used = load_model(model, loader)
    assert used == str(model)
    assert loaded == ("model", str(model))
    assert calls == [str(model)]


def test_load_model_missing_file_goes_to_default(tmp_path):
    calls = []
    loaded, used = load_model(tmp_path / "absent.onnx", lambda p: calls.append(p) or p)
    assert used == DEFAULT_MODEL
    assert calls == [DEFAULT_MODEL]


def test_load_model_falls_back_after_failure(tmp_path):
    model = tmp_path / "broken.onnx"
    model.write_bytes(b"x")

    def loader(p):
        if p == str(model):
            raise RuntimeError("bad model")
        return p

    loaded, used = load_model(model, loader)
    assert used == DEFAULT_MODEL
    assert loaded == DEFAULT_MODEL


def test_load_model_raises_when_all_fail(tmp_path):
    model = tmp_path / "broken.onnx"
    model.write_bytes(b"x")

    def loader(p):
        raise RuntimeError("nope")

    with pytest.raises(ModelError, match="nope"):
        load_model(model, loader)


def test_loaded_message_mentions_model_and_count():
    message = model_loaded_message("models/custom.onnx", 7)
    assert message.startswith("Model loaded successfully!")
    assert "Model: models/custom.onnx\n" in message
    assert "Classes: 7\n" in message
    assert "Load Data" in message