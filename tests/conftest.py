from pathlib import Path
from types import SimpleNamespace

import numpy as np
import pytest

from color_predictor.model_training.model import TensorScope, create_model

LIKED = ["#ff0000", "#ff4400", "#ee1111", "#ff2222"]
DISLIKED = ["#0000ff", "#0044ff", "#1111ee", "#2222ff"]


class FakeModel:
    """Stand-in for ColorModel that records what the pipeline asks of it."""

    def __init__(self, score=0.75, fit_error=None):
        self.score = score
        self.fit_error = fit_error
        self.fit_calls = []
        self.predict_calls = []
        self.live_during_fit = None

    def fit(self, xs, ys, *, epochs, batch_size, validation_split, callbacks, shuffle=True, verbose=0):
        self.live_during_fit = TensorScope.live
        self.fit_calls.append({
            "xs": np.asarray(xs),
            "ys": np.asarray(ys),
            "epochs": epochs,
            "batch_size": batch_size,
            "validation_split": validation_split,
            "callbacks": callbacks,
            "shuffle": shuffle,
        })
        if self.fit_error is not None:
            raise self.fit_error
        return SimpleNamespace(history={"loss": [0.7, 0.5], "accuracy": [0.5, 0.75]})

    def predict_one(self, vector):
        self.predict_calls.append(vector)
        return self.score

    def save(self, path):
        Path(path).write_text("fake")

    @classmethod
    def load(cls, path):
        return cls()


@pytest.fixture
def fake_model():
    return FakeModel()


@pytest.fixture
def keras_model():
    return create_model()


@pytest.fixture
def models_dir(tmp_path):
    return tmp_path / "models"
