"""
experiments/run_experiments.py

Experiment harness that loads the baseline config, applies scenario overrides,
runs multiple shift replications, and reports KPIs with confidence intervals.
"""

from __future__ import annotations
import copy, logging, math, sys
from typing import Callable, Dict, List, Optional
from statistics import mean, stdev, NormalDist
try:
    # When executed as a module: python -m experiments.run_experiments
    from .scenarios import SCENARIOS  # type: ignore
except ImportError:  # pragma: no cover
    # When run as a script in VSCode/terminal
    import os
    ROOT = os.path.dirname(os.path.dirname(__file__))
    if ROOT not in sys.path:
        sys.path.insert(0, ROOT)
    from experiments.scenarios import SCENARIOS  # type: ignore

from orders.config import apply_overrides, load_cfg
from orders.simulation import run_one_shift

def mean_ci(values: List[float], confidence_level: float) -> tuple[float, float]:
    """
    Return (mean, half-width) using a t-distribution critical value (falls back
    to normal only if SciPy is unavailable).
    """
    if not values:
        return 0.0, 0.0
    mu = mean(values)
    n = len(values)
    if n < 2:
        return mu, 0.0
    level = min(max(confidence_level, 0.0), 0.999999)
    alpha = 1.0 - level
    try:  # pragma: no cover
        from scipy.stats import t  # type: ignore
        tcrit = t.ppf(1 - alpha / 2.0, n - 1)
    except ImportError:
        tcrit = NormalDist().inv_cdf(1 - alpha / 2.0)
    half = tcrit * (stdev(values) / math.sqrt(n))
    return mu, half

def series(results: List[Dict], extractor: Callable[[Dict], float]) -> List[float]:
    """Collect a numeric series from each replication result."""
    return [float(extractor(res)) for res in results]

def avg_nested(results: List[Dict], key: str) -> Dict[str, float]:
    """Average nested dictionaries (e.g., delivered_by_recipe) across replications."""
    if not results:
        return {}
    totals: Dict[str, float] = {}
    for res in results:
        nested = res.get(key, {})
        for subk, val in nested.items():
            totals[subk] = totals.get(subk, 0.0) + float(val)
    return {subk: totals[subk] / len(results) for subk in totals}

def run_scenario(cfg: Dict, sc: Dict, replications: int) -> List[Dict]:
    sc_base_cfg = apply_overrides(cfg, sc["overrides"])
    scenario_seed = sc_base_cfg.get("sim", {}).get("seed", 0)
    results = []
    for rep in range(replications):
        sc_cfg = copy.deepcopy(sc_base_cfg)
        sc_cfg.setdefault("sim", {})["seed"] = scenario_seed + rep
        results.append(run_one_shift(sc_cfg))
    return results

def main(argv: Optional[List[str]] = None):
    """Entry point: drive all scenarios, replications, and report KPIs."""
    argv = sys.argv[1:] if argv is None else argv
    cfg = load_cfg(argv[0] if argv else None)
    logging.basicConfig(
        level=cfg.get("sim", {}).get("log_level", "WARNING"),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )
    exp_cfg = cfg.get("experiments", {})
    replications = max(1, int(exp_cfg.get("replications", 1)))
    confidence = float(exp_cfg.get("confidence_level", 0.95))
    level_pct = confidence * 100.0

    for sc in SCENARIOS:
        results = run_scenario(cfg, sc, replications)
        tips = mean_ci(series(results, lambda r: r.get("tips_total", 0)), confidence)
        delivered = mean_ci(series(results, lambda r: r.get("delivered", 0)), confidence)
        expired = mean_ci(series(results, lambda r: r.get("expired", 0)), confidence)
        rate = mean_ci(series(results, lambda r: r.get("delivery_rate", 0.0) * 100.0), confidence)
        avg_tip = mean_ci(series(results, lambda r: r.get("avg_tip", 0.0)), confidence)
        rejected = mean_ci(series(results, lambda r: r.get("rejected_plates", 0)), confidence)
        by_recipe = {k: round(v, 1) for k, v in avg_nested(results, "delivered_by_recipe").items()}

        print(f"Scenario: {sc['name']} (replications={replications}, {level_pct:.1f}% CI)")
        print(f"  Tips/shift: {tips[0]:.2f} ± {tips[1]:.2f}")
        print(f"  Delivered/shift: {delivered[0]:.2f} ± {delivered[1]:.2f}")
        print(f"  Expired/shift: {expired[0]:.2f} ± {expired[1]:.2f}")
        print(f"  Delivery rate: {rate[0]:.1f}% ± {rate[1]:.1f}%")
        print(f"  Avg tip per delivery: {avg_tip[0]:.2f} ± {avg_tip[1]:.2f}")
        print(f"  Rejected plates/shift: {rejected[0]:.2f} ± {rejected[1]:.2f}")
        print(f"  Delivered by recipe (mean/shift): {by_recipe}")
        print("-")

if __name__ == "__main__":
    main()
