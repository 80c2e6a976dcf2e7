from setuptools import setup, find_packages

setup(
    name="MCBias",
    version="0.1.0",
    packages=find_packages(include=["mcbias", "mcbias.*"]),
    python_requires=">=3.8",
    install_requires=[
        "numpy",
        "pandas",
        "matplotlib",
        "scipy",
    ],
    extras_require={
        "progress": ["tqdm"],
        "test": ["pytest", "statsmodels"],
    },
    author="Paweł Lenartowicz",
    description="Monte Carlo view of measurement-error bias in utilization estimates",
)
