"""Thin MLflow tracing wrapper used by the retrieval and pipeline layers.

Usage:

    from parcelmap.observability.tracing import trace

    @trace(name="geocode", span_type="TOOL")
    async def geocode(query): ...
"""

import logging

import mlflow

logger = logging.getLogger(__name__)


def trace(name: str | None = None, **kwargs):
    """Decorator: wraps a sync or async function in an MLflow trace."""
    return mlflow.trace(name=name, **kwargs) if name else mlflow.trace(**kwargs)


def init_tracking(tracking_uri: str, experiment_name: str) -> None:
    """Point MLflow at a tracking store and experiment for this process."""
    mlflow.set_tracking_uri(tracking_uri)
    mlflow.set_experiment(experiment_name)
    logger.debug("MLflow tracking at %s (%s)", tracking_uri, experiment_name)
