import os

from dotenv import load_dotenv

# Load environment variables from .env
load_dotenv()

# Model Configuration
MODEL_CONFIG = {
    'input_shape': (3,),
    'dense_units': [32, 16],
    'dropout_rate': 0.2,
    'learning_rate': 0.001,
    'kernel_initializer': 'glorot_normal'
}

# Training Configuration
TRAIN_CONFIG = {
    'epochs': 50,
    'batch_size': 32,
    'validation_split': 0.2,
    'early_stopping': {
        'monitor': 'val_loss',
        'min_delta': 0.001,
        'patience': 5,
        'mode': 'min'
    },
    # Gate applied by the session before it lets a training run start
    'min_samples_per_class': 2
}

# Storage Configuration
STORAGE_CONFIG = {
    'models_dir': os.getenv('COLOR_MODELS_DIR', 'models'),
    'model_id': os.getenv('COLOR_MODEL_ID', 'color-predictor-v1'),
    'extension': '.keras'
}

# W&B Configuration
WANDB_CONFIG = {
    'project': os.getenv('WANDB_PROJECT', 'color-predictor'),
    'entity': os.getenv('WANDB_ENTITY') or None,
    'save_code': True
}

# API Configuration
API_CONFIG = {
    'host': os.getenv('API_HOST', '0.0.0.0'),
    'port': int(os.getenv('API_PORT', '8000'))
}
