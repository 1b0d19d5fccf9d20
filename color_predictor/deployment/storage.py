"""Local model storage: one Keras archive per model identifier."""
import os
import re
from pathlib import Path

from color_predictor.exceptions import ModelLoadError, ModelSaveError
from color_predictor.model_training.config import STORAGE_CONFIG
from color_predictor.model_training.model import ColorModel, Trainable

_MODEL_ID_PATTERN = re.compile(r'[A-Za-z0-9_-][A-Za-z0-9._-]*')


def model_path(model_id, models_dir=None):
    """Resolve where the model ``model_id`` lives on disk"""
    if not isinstance(model_id, str) or not _MODEL_ID_PATTERN.fullmatch(model_id):
        raise ValueError(f"Invalid model id: {model_id!r}")
    models_dir = Path(models_dir or STORAGE_CONFIG['models_dir'])
    return models_dir / f"{model_id}{STORAGE_CONFIG['extension']}"


def save_model(model: Trainable, model_id, models_dir=None):
    try:
        path = model_path(model_id, models_dir)
        path.parent.mkdir(parents=True, exist_ok=True)

        # Keras picks the format from the extension, so the temp file keeps it
        tmp_path = path.with_name(f".{model_id}.tmp{STORAGE_CONFIG['extension']}")
        try:
            model.save(str(tmp_path))
            os.replace(tmp_path, path)
        except Exception:
            tmp_path.unlink(missing_ok=True)
            raise
    except Exception as e:
        raise ModelSaveError(f"Failed to save model: {e}") from e
    return path


def load_model(model_id, models_dir=None, model_cls: type[Trainable] = ColorModel):
    """Load a model saved with ``save_model``.

    A missing entry and an unreadable one fail the same way, with
    ModelLoadError.
    """
    try:
        path = model_path(model_id, models_dir)
        if not path.exists():
            raise FileNotFoundError(f"No saved model at {path}")
        return model_cls.load(str(path))
    except Exception as e:
        raise ModelLoadError(f"Failed to load model: {e}") from e


def list_models(models_dir=None):
    models_dir = Path(models_dir or STORAGE_CONFIG['models_dir'])
    if not models_dir.is_dir():
        return []

    extension = STORAGE_CONFIG['extension']
    return sorted(
        p.name[:-len(extension)]
        for p in models_dir.glob(f"*{extension}")
        if not p.name.startswith('.')
    )


def delete_model(model_id, models_dir=None):
    """Remove a saved model. Returns False if there was nothing to remove."""
    path = model_path(model_id, models_dir)
    if not path.exists():
        return False
    path.unlink()
    return True
