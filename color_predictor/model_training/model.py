import threading
from typing import Protocol, runtime_checkable

import numpy as np
import tensorflow as tf
from tensorflow.keras import layers, models

from color_predictor.model_training.config import MODEL_CONFIG


@runtime_checkable
class Trainable(Protocol):
    """The few engine capabilities the pipeline relies on."""

    def fit(self, xs, ys, *, epochs: int, batch_size: int,
            validation_split: float, callbacks: list, shuffle: bool = True,
            verbose: int = 0): ...

    def predict_one(self, vector) -> float: ...

    def save(self, path: str) -> None: ...

    @classmethod
    def load(cls, path: str) -> "Trainable": ...


class TensorScope:
    """Engine tensors held for the duration of one training or inference call.

    Entering converts the given arrays to float32 tensors; leaving drops them
    whether the body returned or raised. ``live`` counts tensors currently
    held across all threads.
    """

    live = 0
    _live_lock = threading.Lock()

    def __init__(self, *arrays):
        self.arrays = arrays
        self.tensors = []

    def __enter__(self):
        self.tensors = [tf.convert_to_tensor(a, dtype=tf.float32) for a in self.arrays]
        with TensorScope._live_lock:
            TensorScope.live += len(self.tensors)
        return self.tensors

    def __exit__(self, exc_type, exc, tb):
        with TensorScope._live_lock:
            TensorScope.live -= len(self.tensors)
        self.tensors.clear()
        self.arrays = ()
        return False


class ColorModel:
    """Keras binary classifier mapping an RGB vector to a like score."""

    def __init__(self, model):
        self.model = model

    def fit(self, xs, ys, *, epochs, batch_size, validation_split, callbacks, shuffle=True, verbose=0):
        return self.model.fit(
            xs, ys,
            epochs=epochs,
            batch_size=batch_size,
            validation_split=validation_split,
            shuffle=shuffle,
            callbacks=callbacks,
            verbose=verbose
        )

    def predict_one(self, vector):
        with TensorScope(np.asarray([vector], dtype='float32')) as tensors:
            prediction = self.model.predict(tensors[0], verbose=0)
        return float(prediction[0][0])

    def save(self, path):
        self.model.save(path)

    @classmethod
    def load(cls, path):
        return cls(tf.keras.models.load_model(path))

    def count_params(self):
        return self.model.count_params()


def create_model(learning_rate=MODEL_CONFIG['learning_rate'], dropout=MODEL_CONFIG['dropout_rate']):
    """Create and compile the color preference classifier"""
    config = MODEL_CONFIG
    initializer = config['kernel_initializer']

    model = models.Sequential([
        layers.Input(shape=config['input_shape']),

        # First Dense Block
        layers.Dense(config['dense_units'][0], kernel_initializer=initializer),
        layers.BatchNormalization(),
        layers.Activation('relu'),
        layers.Dropout(dropout),

        # Second Dense Block
        layers.Dense(config['dense_units'][1], kernel_initializer=initializer),
        layers.BatchNormalization(),
        layers.Activation('relu'),
        layers.Dropout(dropout),

        # Output Layer
        layers.Dense(1, activation='sigmoid', kernel_initializer=initializer)
    ])

    model.compile(
        optimizer=tf.keras.optimizers.Adam(learning_rate=learning_rate),
        loss='binary_crossentropy',
        metrics=['accuracy', tf.keras.metrics.Precision(name='precision')]
    )
    return ColorModel(model)
