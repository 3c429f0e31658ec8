"""Signals module - indicator snapshot to recommendation"""

from domain.signals.prediction import get_prediction, label_for_score, score_prediction

__all__ = ["get_prediction", "label_for_score", "score_prediction"]
