"""Post-hoc summaries of synapse state."""

import pandas as pd


def efficacy_summary(synapses):
    """One row per synapse with its parameters and efficacy statistics.

    Parameters
    ----------
    synapses : list of Synapse or SynapticNetwork

    Returns
    -------
    pd.DataFrame
        Columns: kind, weight, distance, delay, n_samples, mean_efficacy,
        min_efficacy, max_efficacy.
    """
    synapses = getattr(synapses, "synapses", synapses)
    rows = []
    for s in synapses:
        stat = s.efficacy_stat
        rows.append({
            "kind": s.kind,
            "weight": s.weight,
            "distance": s.distance,
            "delay": s.delay,
            "n_samples": stat.num_samples,
            "mean_efficacy": stat.arith_avg,
            "min_efficacy": stat.min,
            "max_efficacy": stat.max,
        })
    return pd.DataFrame(rows, columns=[
        "kind", "weight", "distance", "delay", "n_samples",
        "mean_efficacy", "min_efficacy", "max_efficacy",
    ])


def efficacy_by_kind(synapses):
    """Mean efficacy and sample count aggregated per synapse kind."""
    df = efficacy_summary(synapses)
    if df.empty:
        return pd.DataFrame(columns=["n_synapses", "n_samples", "mean_efficacy"])
    sampled = df[df["n_samples"] > 0]
    grouped = df.groupby("kind").agg(
        n_synapses=("weight", "size"),
        n_samples=("n_samples", "sum"),
    )
    grouped["mean_efficacy"] = sampled.groupby("kind")["mean_efficacy"].mean()
    return grouped
