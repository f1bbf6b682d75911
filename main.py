"""
Cavity flow solver - entry point for solving and plotting.

Usage:
    python main.py
    python main.py N=41 mu=0.02 dt=5e-4
    python main.py solver.sweep=jacobi solver.criterion=absolute
    python main.py -m dt=1e-3,5e-4 N=41,81
    python main.py mlflow.enabled=true
"""

import logging
import sys
from pathlib import Path

import hydra
from hydra.core.hydra_config import HydraConfig
from omegaconf import DictConfig

sys.path.insert(0, str(Path(__file__).parent / "src"))

from cavityflow import StreamVorticitySolver  # noqa: E402
from cavityflow.config import parameters_from_config  # noqa: E402
from cavityflow.plotting import generate_plots  # noqa: E402

log = logging.getLogger(__name__)


def run(cfg: DictConfig, output_dir: Path) -> StreamVorticitySolver:
    """Build the solver from config, solve, save and plot."""
    solver = StreamVorticitySolver(params=parameters_from_config(cfg))

    def make_artifacts(solved):
        if not cfg.output.plot:
            return []
        return generate_plots(
            solved,
            output_dir / "plots",
            seed=cfg.output.seed,
            n_seeds=cfg.output.n_seeds,
            usetex=cfg.output.usetex,
        )

    if cfg.mlflow.enabled:
        from cavityflow.tracking import log_solver_run, setup_mlflow

        log.info(f"MLflow experiment: {setup_mlflow(cfg)}")
        run_id = log_solver_run(solver, cfg, run_name=f"sv_N{cfg.N}", make_artifacts=make_artifacts)
        log.info(f"MLflow run: {run_id[:8]}")
    else:
        solver.solve()
        make_artifacts(solver)

    if cfg.output.save:
        solver.save(output_dir / "solution.h5")

    m = solver.metrics
    log.info(
        f"Done: {m.status} after {m.iterations} iter, err={m.final_residual:.3e}, "
        f"time={m.wall_time_seconds:.2f}s"
    )
    return solver


@hydra.main(config_path="conf", config_name="config", version_base=None)
def main(cfg: DictConfig) -> None:
    """Main entry point."""
    log.info(f"N={cfg.N}, Re={cfg.lid_velocity * cfg.L * cfg.rho / cfg.mu:.0f}, dt={cfg.dt}")
    output_dir = Path(HydraConfig.get().runtime.output_dir)
    run(cfg, output_dir)


if __name__ == "__main__":
    main()
