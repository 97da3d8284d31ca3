"""Price dynamics models, regimes and activity levels."""

from regime_pathways.model.dynamics import RegimeSamplingModel

# Model registry for string-based lookup
MODEL_REGISTRY: dict[str, type] = {
    "regime_sampling": RegimeSamplingModel,
}


def get_model(model_name: str):
    """Get a dynamics model class by name.

    Args:
        model_name: Name of the model (e.g., "regime_sampling")

    Returns:
        Model class from registry

    Raises:
        ValueError: If model name not found in registry
    """
    if model_name not in MODEL_REGISTRY:
        available = ", ".join(MODEL_REGISTRY.keys())
        raise ValueError(
            f"Unknown model '{model_name}'. Available models: {available}"
        )
    return MODEL_REGISTRY[model_name]
