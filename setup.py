from setuptools import setup, find_packages

with open('README.md', 'r', encoding='utf-8') as f:
    long_description = f.read()

setup(
    name='rna-navigator',
    version='1.0.0',
    packages=find_packages(exclude=['tests']),
    description='Closed-form estimator of RNA catalytic and thermodynamic profiles under Mg2+, temperature and crowding conditions.',
    long_description=long_description,
    long_description_content_type='text/markdown',
    install_requires=[
        'biopython>=1.79', 'pandas>=1.3.0', 'openpyxl>=3.0.0',
        'numpy>=1.20.0', 'PyYAML>=5.4.0', 'loguru>=0.5.3'
    ],
    extras_require={'test': ['pytest>=7.0']},
    entry_points={'console_scripts': ['rna-navigator = rna_navigator.main:main']},
    package_data={'rna_navigator': ['config/rna-navigator.yaml']},
    include_package_data=True,
    python_requires='>=3.8',
)
