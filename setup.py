"""
kgsearch Setup Script

Install with: pip install -e .[test]
"""

from setuptools import setup, find_packages

setup(
    name='kg-search',
    version='0.1.0',
    description='Hybrid knowledge-graph + vector search tools for a portfolio assistant',
    packages=find_packages(include=['kgsearch', 'kgsearch.*']),
    package_data={
        'kgsearch.config': ['tools.yaml'],
    },
    include_package_data=True,
    install_requires=[
        'structlog>=23.2.0',
        'pydantic>=2.5.0',
        'pyyaml>=6.0.1',
        'click>=8.1.0',
        'falkordb>=1.0.0',
        'sentence-transformers>=2.2.0',
        'torch>=2.0.0',
        'cohere>=5.11.0',
        'httpx>=0.27.0',
    ],
    extras_require={
        'test': [
            'pytest>=7.4.0',
            'pytest-asyncio>=0.23.0',
        ],
    },
    entry_points={
        'console_scripts': [
            'kgsearch=kgsearch.cli:cli',
        ],
    },
    python_requires='>=3.11',
    classifiers=[
        'Development Status :: 3 - Alpha',
        'Intended Audience :: Developers',
        'License :: OSI Approved :: MIT License',
        'Programming Language :: Python :: 3.11',
        'Programming Language :: Python :: 3.12',
        'Topic :: Scientific/Engineering :: Artificial Intelligence',
        'Topic :: Database',
    ],
)
