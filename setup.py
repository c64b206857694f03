import setuptools

setuptools.setup(
    name='fk',
    version='0.1',
    description='Lexer and parser for fk synthetic data schemas',
    long_description='Library for loading fk schema files (type aliases, tables with primary and foreign keys, and table ratios) for synthetic data generation',
    author='fk developers',
    license='MIT',
    classifiers=[
        'Development Status :: 3 - Alpha',
        'Intended Audience :: Developers',
        'Topic :: Software Development :: Build Tools',
        'Topic :: Database',
        'License :: OSI Approved :: MIT License',
        'Programming Language :: Python :: 3',
    ],
    keywords='schema parser synthetic-data plain-text',
    packages=['fk', 'fk.tests'],
    python_requires='>=3.5',
    install_requires=[],
    extras_require={
        'test': ['pytest'],
    },
    package_data={
        'fk.tests': ['*.fk'],
    },
    data_files=[],
    entry_points={
        'console_scripts': ['fk = fk.__main__:main'],
    },
)
