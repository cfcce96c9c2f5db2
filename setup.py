#!/usr/bin/env python3
"""
Setup script for Toddler Gestures
"""

from setuptools import setup, find_packages

setup(
    name="toddler-gestures",
    version="0.1.0",
    description="Gesture classification engine for a toddler learning app",
    packages=find_packages(exclude=("tests", "tests.*")),
    package_data={"toddler_gestures": ["config.default.yaml"]},
    python_requires=">=3.8",
    install_requires=[
        "numpy",
        "PyYAML",
    ],
    extras_require={
        "camera": [
            "opencv-python",
            "mediapipe",
        ],
        "test": [
            "pytest",
        ],
    },
    entry_points={
        "console_scripts": [
            "toddler-gestures=toddler_gestures.main:cli",
        ],
    },
)
