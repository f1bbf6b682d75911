"""Hydra/OmegaConf configuration adapters."""

from omegaconf import DictConfig, OmegaConf

from .datastructures import Parameters


def parameters_from_config(cfg: DictConfig) -> Parameters:
    """Build solver Parameters from the root Hydra config.

    The grid size ``N`` sets both ``ni`` and ``nj``.
    """
    solver_cfg = cfg.get("solver", {})
    return Parameters(
        L=float(cfg.L),
        lid_velocity=float(cfg.lid_velocity),
        rho=float(cfg.rho),
        mu=float(cfg.mu),
        dt=float(cfg.dt),
        ni=int(cfg.N),
        nj=int(cfg.N),
        max_iterations=int(cfg.max_iterations),
        tolerance=float(cfg.tolerance),
        sweep=str(solver_cfg.get("sweep", "gauss_seidel")),
        criterion=str(solver_cfg.get("criterion", "signed")),
        warmup_iterations=int(solver_cfg.get("warmup_iterations", 10)),
    )


def config_to_dict(cfg: DictConfig) -> dict:
    """Resolved plain-dict copy of a config (for MLflow artifacts)."""
    return OmegaConf.to_container(cfg, resolve=True)
