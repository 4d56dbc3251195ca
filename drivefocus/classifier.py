from __future__ import annotations

import math
import random
from collections.abc import Mapping
from typing import Any

import numpy as np

from .errors import InvalidInput

FOCUS_THRESHOLD = 0.90
# The pose model exported for the dashboard page lists the focused pose third.
DEFAULT_FOCUS_CLASS: int | str = 2


def _as_probability(value: Any, where: str) -> float:
    if isinstance(value, bool) or value is None:
        raise InvalidInput(f"Missing probability for {where}")
    try:
        prob = float(value)
    except (TypeError, ValueError) as e:
        raise InvalidInput(f"Probability for {where} is not a number: {value!r}") from e
    if math.isnan(prob) or prob < 0.0 or prob > 1.0:
        raise InvalidInput(f"Probability for {where} is outside [0, 1]: {prob}")
    return prob


def _entry_probability(entry: Any, where: str) -> float:
    if isinstance(entry, Mapping):
        if "probability" not in entry:
            raise InvalidInput(f"Missing probability for {where}")
        return _as_probability(entry["probability"], where)
    return _as_probability(entry, where)


def focus_probability(predictions: Any, focus_class: int | str = DEFAULT_FOCUS_CLASS) -> float:
    """
    Pull the focused-class probability out of a classifier payload.

    Accepted shapes:
    - list of {"className": str, "probability": float} (Teachable Machine pose output)
    - mapping of class name -> probability
    - a flat sequence / numpy array of probabilities (focus_class must be an index)
    """
    if predictions is None:
        raise InvalidInput("Classification payload is empty")

    if isinstance(predictions, Mapping):
        key = str(focus_class)
        if key not in predictions:
            raise InvalidInput(f"Classification payload has no class {key!r}")
        return _entry_probability(predictions[key], f"class {key!r}")

    if isinstance(predictions, np.ndarray):
        probs = np.asarray(predictions, dtype=np.float64).ravel()
        if not isinstance(focus_class, int) or not (0 <= focus_class < probs.shape[0]):
            raise InvalidInput(f"Classification payload has no class {focus_class!r}")
        return _as_probability(probs[focus_class], f"class {focus_class}")

    if isinstance(predictions, (str, bytes)):
        raise InvalidInput("Classification payload must be a list or mapping")

    try:
        entries = list(predictions)
    except TypeError as e:
        raise InvalidInput("Classification payload must be a list or mapping") from e

    if isinstance(focus_class, int):
        if not (0 <= focus_class < len(entries)):
            raise InvalidInput(f"Classification payload has no class index {focus_class}")
        return _entry_probability(entries[focus_class], f"class {focus_class}")

    for entry in entries:
        if isinstance(entry, Mapping) and entry.get("className") == focus_class:
            return _entry_probability(entry, f"class {focus_class!r}")
    raise InvalidInput(f"Classification payload has no class {focus_class!r}")


def is_focused(probability: float, threshold: float = FOCUS_THRESHOLD, legacy_rounding: bool = False) -> bool:
    if legacy_rounding:
        # Mirrors `probability.toFixed(2) > 0.9` from the first dashboard build.
        probability = float(f"{probability:.2f}")
    return probability > threshold


class SimulatedClassifier:
    """
    Stand-in for the pose model, for demos and the `simulate` command.

    Produces Teachable Machine shaped predictions: focused for ~45 ticks,
    low focus for ~10 ticks, repeat, with a little noise.
    """

    def __init__(
        self,
        class_names: tuple[str, ...] = ("looking away", "phone", "focused"),
        focus_index: int = 2,
        seed: int | None = None,
    ):
        self.class_names = class_names
        self.focus_index = focus_index
        self._rng = random.Random(seed)
        self._counter = 0

    def predict(self) -> list[dict[str, Any]]:
        self._counter += 1
        phase = self._counter % 55
        focused = phase < 45
        if self._rng.random() < 0.02:
            focused = not focused

        focus_prob = self._rng.uniform(0.93, 1.0) if focused else self._rng.uniform(0.0, 0.6)
        rest = (1.0 - focus_prob) / max(1, len(self.class_names) - 1)
        return [
            {"className": name, "probability": focus_prob if i == self.focus_index else rest}
            for i, name in enumerate(self.class_names)
        ]
