"""
Aggregator Cleaner 安装配置
"""
from setuptools import setup, find_packages

setup(
    name="aggregator-cleaner",
    version="1.0.0",
    description="识别并清理 Insights Results Aggregator 数据库中过期集群的数据",
    author="Aggregator Cleaner Team",
    author_email="",
    packages=find_packages(exclude=["tests", "tests.*", "scripts"]),
    python_requires=">=3.10",
    install_requires=[
        "loguru>=0.7",
        "pydantic>=2.0",
        "pydantic-settings>=2.0",
        "SQLAlchemy>=2.0",
        "sqlmodel>=0.0.16",
        "psycopg2-binary>=2.9",
        "tabulate>=0.9",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "aggregator-cleaner=cleaner.main:main",
        ],
    },
)
