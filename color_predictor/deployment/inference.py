from dataclasses import asdict, dataclass

from color_predictor.exceptions import InvalidInputError
from color_predictor.model_training.colors import hex_to_rgb
from color_predictor.model_training.model import Trainable


@dataclass(frozen=True)
class PredictionResult:
    score: float
    confidence: float
    likely: bool
    prediction: str

    def to_dict(self):
        return asdict(self)


def predict_color(model: Trainable, color):
    """Predict whether the user would like ``color``.

    The confidence is the distance from the decision boundary scaled to
    [0, 1]: 0 for a score of 0.5, 1 for a score of 0 or 1.
    """
    rgb = hex_to_rgb(color)
    if rgb is None:
        raise InvalidInputError('Invalid color format')

    score = model.predict_one(rgb)
    likely = score > 0.5

    return PredictionResult(
        score=score,
        confidence=abs(score - 0.5) * 2,
        likely=likely,
        prediction='like' if likely else 'dislike'
    )
