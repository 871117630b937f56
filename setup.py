from setuptools import setup, find_packages

setup(
    name="carbonroute",
    version="0.1.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "fastapi",
        "uvicorn",
        "python-dotenv",
        "pydantic>=2",
        "pydantic-settings",
        "googlemaps",
        "polyline",
        "httpx",
        "tenacity",
        "fpdf2",
    ],
    extras_require={
        "test": [
            "pytest",
            "pytest-asyncio",
        ],
    },
    entry_points={
        "console_scripts": [
            "carbonroute=carbonroute.main:run",
        ],
    },
    python_requires=">=3.10",
)
