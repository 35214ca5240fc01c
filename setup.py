# setup.py
from setuptools import setup, find_packages

setup(
    name="sitemap_counter",
    version="0.1.0",
    description="SitemapCounter: подсчёт URL в sitemap и sitemap-index",
    packages=find_packages(exclude=["tests", "tests.*"]),  # автоматически найдёт папку sitemap_counter
    install_requires=[
        "aiohttp>=3.9",
        "click>=8.1",
        "lxml>=5.0",
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
            "sitemap-counter=sitemap_counter.cli:cli",
        ],
    },
    python_requires=">=3.11",
)
