"""
カテドラルプロジェクトのセットアップスクリプト
"""

from setuptools import setup, find_packages

setup(
    name="cathedral",
    version="1.0.0",
    description="カテドラル - ポリオミノで陣地を取り合うボードゲームのルールエンジン",
    author="",
    packages=find_packages(include=["cathedral", "cathedral.*"]),
    package_dir={"": "."},
    python_requires=">=3.10",
    install_requires=[
        "pydantic>=2.11.10",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0.0",
            "hypothesis>=6.0.0",
        ],
    },
)
