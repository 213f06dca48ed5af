"""Setup configuration for the RAG ingestion core."""

from setuptools import setup, find_packages

setup(
    name='rag-ingest-core',
    version='1.0.0',
    description='Unicode-safe small-to-big chunking for RAG document ingestion',
    packages=find_packages(exclude=['tests', 'tests.*']),
    python_requires='>=3.11',
    install_requires=[
        'python-dotenv>=1.0.0',
        'PyYAML>=6.0',
        'click>=8.1.7',
        'colorama>=0.4.6',
    ],
    extras_require={
        'test': [
            'pytest>=7.4',
        ],
    },
    entry_points={
        'console_scripts': [
            'rag-ingest=rag_ingest.cli:cli',
        ],
    },
)
