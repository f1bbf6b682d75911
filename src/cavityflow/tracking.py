"""MLflow experiment tracking for solver runs."""

import logging
import os
import tempfile
from pathlib import Path

import mlflow
from dotenv import load_dotenv
from omegaconf import DictConfig

from .config import config_to_dict

log = logging.getLogger(__name__)


def get_experiment_name(cfg: DictConfig) -> str:
    """Build full experiment name with optional prefix."""
    name = cfg.experiment_name
    prefix = cfg.mlflow.get("project_prefix", "")
    if prefix and not name.startswith("/"):
        return f"{prefix}/{name}"
    return name


def setup_mlflow(cfg: DictConfig) -> str:
    """Setup MLflow tracking and return experiment name."""
    load_dotenv()

    tracking_uri = cfg.mlflow.get("tracking_uri", "./mlruns")
    if str(cfg.mlflow.get("mode", "")).lower() in ("files", "local"):
        # A remote URI from .env must not override the local store
        os.environ["MLFLOW_TRACKING_URI"] = str(tracking_uri)
    mlflow.set_tracking_uri(tracking_uri)

    experiment_name = get_experiment_name(cfg)
    try:
        mlflow.set_experiment(experiment_name)
    except Exception as exc:
        experiment_name = f"{experiment_name}-restored"
        log.warning(f"MLflow set_experiment failed ({exc}); using '{experiment_name}'")
        mlflow.set_experiment(experiment_name)

    return experiment_name


def log_solver_run(solver, cfg: DictConfig, run_name: str, make_artifacts=None) -> str:
    """Run the solver inside an MLflow run and log everything. Returns run_id.

    ``make_artifacts(solver)`` runs after solving and returns file paths
    (figures) to attach to the run.
    """
    tags = {"solver": solver.params.method, "sweep": solver.params.sweep}

    with mlflow.start_run(run_name=run_name, tags=tags) as run:
        mlflow.log_params(solver.params.to_mlflow())
        mlflow.log_dict(config_to_dict(cfg), "config.yaml")

        solver.solve()

        mlflow.log_metrics(solver.metrics.to_mlflow())
        mlflow.set_tag("status", solver.metrics.status)
        if solver.time_series:
            batch = solver.time_series.to_mlflow_batch()
            if batch:
                mlflow.tracking.MlflowClient().log_batch(run.info.run_id, metrics=batch)

        with tempfile.TemporaryDirectory() as tmpdir:
            h5_path = Path(tmpdir) / "solution.h5"
            solver.save(h5_path)
            mlflow.log_artifact(str(h5_path))

        for path in (make_artifacts(solver) if make_artifacts else []):
            mlflow.log_artifact(str(path))

        return run.info.run_id
