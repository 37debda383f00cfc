"""
Static, illustrative content for the overview and results pages.
None of these figures come from a live model.
"""

import math
from typing import Dict, List

MODEL_CARDS: List[Dict] = [
    {
        "id": "cnn",
        "name": "CNN",
        "description": [
            "A standard Convolutional Neural Network (CNN) for time series classification. "
            "Suitable for baseline performance on light curve data.",
            "Uses stacked 1D convolutional layers with ReLU activations and max pooling. "
            "Trained with cross-entropy loss and Adam optimizer.",
        ],
        "metrics": {"Accuracy": 0.91, "Recall": 0.88, "Precision": 0.89, "F1 Score": 0.885, "AUC": 0.92, "Latency (ms)": 10.2},
        "parameters": {"Learning Rate": "1e-3", "Optimizer": "Adam", "Epochs": 30, "Batch": 128, "Dropout": "0.15", "Layers": 10},
        "baseline": "CNN-SMOTE",
        "comparison": {"Accuracy": (0.91, 0.93), "Recall": (0.88, 0.92), "Precision": (0.89, 0.91), "F1": (0.885, 0.915), "AUC": (0.92, 0.94)},
    },
    {
        "id": "cnn-smote",
        "name": "CNN-SMOTE",
        "description": [
            "A CNN model trained with SMOTE (Synthetic Minority Over-sampling Technique) "
            "to address class imbalance in exoplanet transit detection.",
            "SMOTE generates synthetic samples for the minority class, improving recall and overall robustness.",
        ],
        "metrics": {"Accuracy": 0.93, "Recall": 0.92, "Precision": 0.91, "F1 Score": 0.915, "AUC": 0.94, "Latency (ms)": 11.5},
        "parameters": {"Learning Rate": "1e-3", "Optimizer": "Adam", "Epochs": 30, "Batch": 128, "Dropout": "0.15", "Layers": 10},
        "baseline": "CNN",
        "comparison": {"Accuracy": (0.93, 0.91), "Recall": (0.92, 0.88), "Precision": (0.91, 0.89), "F1": (0.915, 0.885), "AUC": (0.94, 0.92)},
    },
    {
        "id": "gb",
        "name": "Gradient Boosting",
        "description": [
            "Gradient-boosted decision trees over the 14 KOI transit and stellar features.",
        ],
        "metrics": {"Accuracy": 0.89, "Recall": 0.87, "Precision": 0.88, "F1 Score": 0.875, "AUC": 0.93},
        "parameters": {"Estimators": 300, "Learning Rate": "0.05", "Max Depth": 3},
        "baseline": "SVM",
        "comparison": {"Accuracy": (0.89, 0.86), "Recall": (0.87, 0.84), "Precision": (0.88, 0.85), "F1": (0.875, 0.845), "AUC": (0.93, 0.9)},
    },
    {
        "id": "svm",
        "name": "SVM",
        "description": [
            "Support Vector Machine with an RBF kernel over standardized KOI features.",
        ],
        "metrics": {"Accuracy": 0.86, "Recall": 0.84, "Precision": 0.85, "F1 Score": 0.845, "AUC": 0.9},
        "parameters": {"Kernel": "rbf", "C": 10, "Gamma": "scale"},
        "baseline": "Gradient Boosting",
        "comparison": {"Accuracy": (0.86, 0.89), "Recall": (0.84, 0.87), "Precision": (0.85, 0.88), "F1": (0.845, 0.875), "AUC": (0.9, 0.93)},
    },
]

RESULT_PANELS: List[Dict] = [
    {
        "title": "Signal Quality",
        "lines": ["Stellar Noise: Good", "SNR: 7.4", "Duration: 6h 42m", "False Positive Probability: < 1%"],
    },
    {
        "title": "Parameter Uncertainties",
        "lines": ["Orbital Period: ±0.02 days", "Planet Radius: ±0.12 R⊕"],
    },
    {
        "title": "Statistical Metrics",
        "lines": ["F1 Score: 0.92", "Precision: 0.94", "Recall: 0.89"],
    },
]

PLANET_TYPES: List[Dict] = [
    {"label": "Hot Jupiter", "pct": 60},
    {"label": "Neptune-like", "pct": 20},
    {"label": "Super Earth", "pct": 19},
    {"label": "Terrestrial", "pct": 1},
]


def format_metric(value: float) -> str:
    return f"{value:.4f}" if value < 1 else f"{value:.2f}"


def format_percent(value) -> str:
    if value is None:
        return "—"
    try:
        number = float(value)
    except (TypeError, ValueError):
        return "—"
    if math.isnan(number):
        return "—"
    return f"{number * 100:.1f}%"
