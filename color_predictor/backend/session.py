"""One user's color picking session and the model trained from it.

Model lifecycle::

    UNINITIALIZED --load ok--> RESTORED
    UNINITIALIZED --load fails--> FRESH
    RESTORED | FRESH | TRAINED --train ok--> TRAINED   (then saved)
"""
import threading
import time
from enum import Enum

from color_predictor.deployment.inference import predict_color
from color_predictor.deployment.storage import load_model, save_model
from color_predictor.exceptions import (
    InvalidInputError,
    ModelLoadError,
    NotEnoughSamplesError,
    TrainingInProgressError,
)
from color_predictor.model_training.colors import hex_to_rgb, random_hex_color
from color_predictor.model_training.config import MODEL_CONFIG, STORAGE_CONFIG, TRAIN_CONFIG
from color_predictor.model_training.data_loader import preprocess_data
from color_predictor.model_training.model import create_model
from color_predictor.model_training.trainer import fit_dataset, summarize_history


class ModelState(str, Enum):
    UNINITIALIZED = "uninitialized"
    RESTORED = "restored"
    FRESH = "fresh"
    TRAINED = "trained"


class ColorSession:
    def __init__(self, model_id=None, models_dir=None, tracker=None,
                 min_samples_per_class=TRAIN_CONFIG['min_samples_per_class']):
        self.model_id = model_id or STORAGE_CONFIG['model_id']
        self.models_dir = models_dir
        self.tracker = tracker
        self.min_samples_per_class = min_samples_per_class

        self.model = None
        self.state = ModelState.UNINITIALIZED
        self.model_stats = None
        self.liked = []
        self.disliked = []
        self.current_color = '#000000'
        self._training = threading.Lock()

    def initialize(self):
        """Restore the saved model, or start from a fresh one"""
        try:
            self.model = load_model(self.model_id, self.models_dir)
            self.state = ModelState.RESTORED
            print(f"Model restored: {self.model_id}")
        except ModelLoadError as e:
            print(f"No saved model ({e}). Creating a new one.")
            self.model = create_model(
                learning_rate=MODEL_CONFIG['learning_rate'],
                dropout=MODEL_CONFIG['dropout_rate']
            )
            self.state = ModelState.FRESH
        return self.state

    @property
    def is_training(self):
        return self._training.locked()

    def next_color(self, rng=None):
        self.current_color = random_hex_color(rng)
        return self.current_color

    def record(self, color, liked):
        """Add ``color`` (the current color when omitted) to the liked or disliked list"""
        color = self.current_color if color is None else color
        if hex_to_rgb(color) is None:
            raise InvalidInputError(f"Invalid color format: {color!r}")

        (self.liked if liked else self.disliked).append(color)
        self.current_color = color
        return self.sample_stats()

    def reset(self):
        self.liked = []
        self.disliked = []

    def sample_stats(self):
        total = len(self.liked) + len(self.disliked)
        return {
            'liked': len(self.liked),
            'disliked': len(self.disliked),
            'total_samples': total,
            'liked_percentage': round(len(self.liked) / total * 100, 1) if total else 0.0,
            'can_train': (len(self.liked) >= self.min_samples_per_class
                          and len(self.disliked) >= self.min_samples_per_class)
        }

    def train(self, epochs=TRAIN_CONFIG['epochs'], batch_size=TRAIN_CONFIG['batch_size'],
              validation_split=TRAIN_CONFIG['validation_split']):
        """Train on the recorded samples, then persist the model.

        A save failure propagates after the session has already moved to
        TRAINED, so the freshly trained model stays usable. The training
        guard is held until the model has been saved.
        """
        if not self.sample_stats()['can_train']:
            raise NotEnoughSamplesError(
                f"Need at least {self.min_samples_per_class} liked and "
                f"{self.min_samples_per_class} disliked colors to train"
            )
        if self.model is None:
            self.initialize()

        if not self._training.acquire(blocking=False):
            raise TrainingInProgressError("A training run is already in progress")
        try:
            dataset = preprocess_data(list(self.liked), list(self.disliked))
            start_time = time.time()
            history = fit_dataset(
                self.model, dataset,
                epochs=epochs,
                batch_size=batch_size,
                validation_split=validation_split
            )
            duration = time.time() - start_time

            self.state = ModelState.TRAINED
            self.model_stats = summarize_history(history, dataset.total_samples, dropped=dataset.dropped)
            print(f"Training finished in {duration:.2f}s "
                  f"({self.model_stats.epochs_run} epochs, accuracy {self.model_stats.accuracy}%)")

            if self.tracker is not None:
                self.tracker.log_training(history, self.model_stats, self.model_id, duration)

            path = save_model(self.model, self.model_id, self.models_dir)
            print(f"Model saved to {path}")
            return self.model_stats
        finally:
            self._training.release()

    def predict(self, color=None):
        if self.model is None:
            self.initialize()
        return predict_color(self.model, self.current_color if color is None else color)
