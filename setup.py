from setuptools import find_namespace_packages, setup

setup(
    name="deckshare-backend",
    version="0.1.0",
    package_dir={"": "backend"},
    packages=find_namespace_packages(
        where="backend", include=["client*", "models*", "services*", "shared*"]
    ),
    py_modules=["app", "database"],
    python_requires=">=3.11",
    install_requires=[
        "fastapi>=0.110",
        "uvicorn[standard]>=0.29",
        "pydantic>=2.5",
        "SQLAlchemy>=2.0",
        "python-dotenv>=1.0",
        "PyYAML>=6.0",
        "aiohttp>=3.9",
    ],
    extras_require={
        "postgres": ["psycopg2-binary>=2.9"],
        "test": [
            "pytest>=8.0",
            "pytest-asyncio>=0.23",
            "httpx>=0.27",
        ],
    },
    include_package_data=True,
    description="Backend package for DeckShare (slide editor, share links and view analytics)",
)
