from personal_color.classification.base import BaseColorClassifier
from personal_color.classification.factory import ClassifierFactory
from personal_color.classification.placeholder_classifier import PlaceholderClassifier

__all__ = ["BaseColorClassifier", "ClassifierFactory", "PlaceholderClassifier"]
