class ColorPredictorError(Exception):
    """Base class for every error raised by the color predictor."""


class InvalidInputError(ColorPredictorError, ValueError):
    """Malformed color, non-list color arguments or empty color lists."""


class NotEnoughSamplesError(InvalidInputError):
    """Raised by a session when a class has too few samples to train on."""


class DataError(ColorPredictorError, ValueError):
    """Well-shaped input that leaves no usable samples after filtering."""


class TrainingError(ColorPredictorError, RuntimeError):
    """The underlying engine failed while fitting the model."""


class TrainingInProgressError(TrainingError):
    """A training run is already active on this session's model."""


class PersistenceError(ColorPredictorError):
    pass


class ModelSaveError(PersistenceError):
    pass


class ModelLoadError(PersistenceError):
    """No saved model under the identifier, or it could not be read back."""
