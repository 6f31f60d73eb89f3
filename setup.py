from setuptools import setup, find_packages

setup(
    name="daily-temperature-interpolation",
    version="0.1.0",
    description="Sub-daily air temperature interpolation from daily station minima and maxima",
    author="onWater Engineering Team",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    python_requires=">=3.10",
    install_requires=[
        "numpy>=1.24",
        "pandas>=1.5",
        "pydantic>=1.10",
        "PyYAML>=6.0",
        "requests>=2.28",
        "urllib3>=1.26",
        "python-dotenv>=1.0",
        "pytz>=2022.1",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
        ],
    },
)
