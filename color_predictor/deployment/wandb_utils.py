import os
from datetime import datetime

import wandb

from color_predictor.model_training.config import WANDB_CONFIG


class TrainingTracker:
    """Reports finished training runs to W&B when an API key is configured"""

    def __init__(self, api_key=None, project=None, entity=None):
        self.api_key = api_key if api_key is not None else os.getenv("WANDB_API_KEY")
        self.project = project or WANDB_CONFIG['project']
        self.entity = entity or WANDB_CONFIG['entity']
        self.run = None

        if self.enabled:
            print("✅ W&B tracking enabled")
        else:
            print("ℹ️  WANDB_API_KEY not set. W&B tracking disabled.")

    @property
    def enabled(self):
        return bool(self.api_key)

    def _ensure_run(self):
        if self.run is None:
            wandb.login(key=self.api_key)
            self.run = wandb.init(
                project=self.project,
                entity=self.entity,
                name=f"color-predictor-{datetime.now().strftime('%Y%m%d')}",
                save_code=WANDB_CONFIG['save_code'],
                config={
                    "architecture": "dense-32-16",
                    "framework": "tensorflow-keras"
                }
            )
        return self.run

    def log_training(self, history, stats, model_id, duration):
        """Log per-epoch metrics and a run summary. Never raises."""
        if not self.enabled:
            return False

        try:
            run = self._ensure_run()
            metrics = history.history
            epochs = len(metrics.get('loss', []))
            for epoch in range(epochs):
                run.log({
                    name: float(values[epoch])
                    for name, values in metrics.items()
                    if epoch < len(values)
                })

            run.log({
                "model_id": model_id,
                "trained_samples": stats.trained_samples,
                "final_accuracy": stats.accuracy,
                "epochs_run": stats.epochs_run,
                "duration_s": duration,
                "timestamp": datetime.now().isoformat()
            })
            print(f"📊 Logged training run to W&B: {model_id} - {duration:.2f}s")
            return True
        except Exception as e:
            print(f"⚠️  W&B logging error: {e}")
            return False

    def finish(self):
        if self.run is not None:
            self.run.finish()
            self.run = None
