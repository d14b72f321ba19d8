# setup.py
from setuptools import setup, find_packages

setup(
    name="spa_nav",
    version="0.1.0",
    description="Асинхронная SPA-навигация без перезагрузки страниц для статического сайта",
    packages=find_packages(exclude=("tests", "tests.*")),  # автоматически найдёт папку spa_nav
    install_requires=[
        "aiohttp>=3.9",
        "beautifulsoup4>=4.12",
        "click>=8.1",
        "pydantic>=2.5",
        "PyYAML>=6.0",
    ],
    extras_require={
        "test": [
            "pytest>=8.0",
            "pytest-asyncio>=0.23",
        ],
    },
    entry_points={
        "console_scripts": [
            "spa-nav=spa_nav.cli:cli",
        ],
    },
    python_requires=">=3.11",
)
