from setuptools import setup, find_packages

setup(
    name="youtube_subtitles",
    version="0.1.0",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    install_requires=[
        "fastapi>=0.100.0",
        "uvicorn>=0.23.0",
        "pydantic>=2.0",
        "aiohttp>=3.8.0",
        "requests>=2.31.0",
        "youtube-transcript-api>=1.0.0",
        "langchain-core>=0.1.0",
        "langchain-google-genai>=1.0.0",
        "python-dotenv>=1.0.0",
        "colorlog>=6.7.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.4.0",
            "pytest-asyncio>=0.21.0",
            "pytest-cov>=4.1.0",
            "httpx>=0.24.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "youtube-subtitles-api=youtube_subtitles_api.app:main",
        ],
    },
    python_requires=">=3.9",
    description="Fetch YouTube captions as SRT through rotating proxies and translate them with Gemini",
)
