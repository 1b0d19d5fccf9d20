"""Training loop for the color preference model.

The trainer does no locking of its own. Callers must not start a second run
on the same model before the first one has returned.
"""
from dataclasses import dataclass
from datetime import datetime, timezone

import tensorflow as tf

from color_predictor.exceptions import TrainingError
from color_predictor.model_training.config import TRAIN_CONFIG
from color_predictor.model_training.data_loader import preprocess_data
from color_predictor.model_training.model import TensorScope, Trainable


@dataclass
class ModelStats:
    trained_samples: int
    accuracy: float
    loss: float
    epochs_run: int
    last_trained: datetime
    # Recorded colors that were not valid and were left out of the run
    dropped: int = 0

    def to_dict(self):
        return {
            'trained_samples': self.trained_samples,
            'accuracy': self.accuracy,
            'loss': self.loss,
            'epochs_run': self.epochs_run,
            'last_trained': self.last_trained.isoformat(),
            'dropped': self.dropped
        }


def create_early_stopping():
    """Stop once validation loss has stalled for a few epochs"""
    return tf.keras.callbacks.EarlyStopping(**TRAIN_CONFIG['early_stopping'])


def train_model(
    model: Trainable,
    liked_colors,
    disliked_colors,
    epochs=TRAIN_CONFIG['epochs'],
    batch_size=TRAIN_CONFIG['batch_size'],
    validation_split=TRAIN_CONFIG['validation_split'],
    verbose=0
):
    """Fit ``model`` on the given colors and return the Keras History.

    Raises InvalidInputError or DataError for unusable color lists and
    TrainingError when the engine itself fails.
    """
    dataset = preprocess_data(liked_colors, disliked_colors)
    return fit_dataset(
        model, dataset,
        epochs=epochs,
        batch_size=batch_size,
        validation_split=validation_split,
        verbose=verbose
    )


def fit_dataset(
    model: Trainable,
    dataset,
    epochs=TRAIN_CONFIG['epochs'],
    batch_size=TRAIN_CONFIG['batch_size'],
    validation_split=TRAIN_CONFIG['validation_split'],
    verbose=0
):
    """Fit ``model`` on an already preprocessed ColorDataset"""
    try:
        with TensorScope(dataset.xs, dataset.ys) as tensors:
            return model.fit(
                tensors[0], tensors[1],
                epochs=epochs,
                batch_size=batch_size,
                validation_split=validation_split,
                callbacks=[create_early_stopping()],
                shuffle=True,
                verbose=verbose
            )
    except Exception as e:
        raise TrainingError(f"Training failed: {e}") from e


def summarize_history(history, trained_samples, dropped=0):
    """Reduce a training History to the figures shown after a run"""
    metrics = history.history
    accuracy = metrics.get('accuracy') or [0.0]
    loss = metrics.get('loss') or [0.0]

    return ModelStats(
        trained_samples=trained_samples,
        accuracy=round(float(accuracy[-1]) * 100, 1),
        loss=float(loss[-1]),
        epochs_run=len(loss) if metrics.get('loss') else 0,
        last_trained=datetime.now(timezone.utc),
        dropped=dropped
    )
