"""Learn which colors a user likes from their likes and dislikes."""
from color_predictor.deployment.inference import PredictionResult, predict_color
from color_predictor.deployment.storage import load_model, save_model
from color_predictor.model_training.colors import hex_to_rgb, random_hex_color, rgb_to_hex
from color_predictor.model_training.data_loader import ColorDataset, preprocess_data
from color_predictor.model_training.model import ColorModel, create_model
from color_predictor.model_training.trainer import train_model

__version__ = "1.0.0"

__all__ = [
    "ColorDataset",
    "ColorModel",
    "PredictionResult",
    "create_model",
    "hex_to_rgb",
    "load_model",
    "predict_color",
    "preprocess_data",
    "random_hex_color",
    "rgb_to_hex",
    "save_model",
    "train_model",
]
