import os
import re
from setuptools import setup, find_packages


def read(fname: str) -> str:
    return open(os.path.join(os.path.dirname(__file__), fname), encoding='utf-8').read()


def version() -> str:
    init = read(os.path.join('mtapi', '__init__.py'))
    return re.search(r"^__version__ = '([^']+)'", init, re.M).group(1)

dependencies = ['appdirs', 'colorama', 'python_dateutil', 'requests>=2.1.0,!=2.9.0,!=2.12.0']
test_dependencies = ['httpretty', 'mock']

setup(
    name='mtapi',
    version=version(),
    description='a client library and command line interface for the MindTouch REST API',
    long_description=read('README.rst'),
    license='GPLv2+',
    keywords=['mindtouch', 'deki', 'wiki', 'rest api'],
    zip_safe=False,
    packages=find_packages(exclude=['tests']),
    py_modules=['mindtouch_cli'],
    test_suite='tests.get_suite',
    entry_points={'console_scripts': ['mindtouch_cli = mindtouch_cli:main',
                                      'mtcli = mindtouch_cli:main']},
    install_requires=dependencies,
    tests_require=test_dependencies,
    extras_require={'test': test_dependencies},
    classifiers=[
        'Environment :: Console',
        'License :: OSI Approved :: GNU General Public License v2 or later (GPLv2+)',
        'Programming Language :: Python :: 3',
        'Programming Language :: Python :: 3 :: Only',
        'Development Status :: 4 - Beta',
        'Topic :: Internet :: WWW/HTTP',
        'Topic :: Software Development :: Libraries'
    ]
)
