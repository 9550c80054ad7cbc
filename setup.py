#  ___________________________________________________________________________
#
#  EGRET: Electrical Grid Research and Engineering Tools
#  Copyright 2019 National Technology & Engineering Solutions of Sandia, LLC
#  (NTESS). Under the terms of Contract DE-NA0003525 with NTESS, the U.S.
#  Government retains certain rights in this software.
#  This software is distributed under the Revised BSD License.
#  ___________________________________________________________________________

from setuptools import setup, find_packages
from pathlib import Path

DISTNAME = 'ucstorage'
VERSION = '0.1.0.dev0'
PACKAGES = find_packages(include=['ucstorage', 'ucstorage.*'])
EXTENSIONS = []
DESCRIPTION = 'Unit commitment with pumped hydro storage as a Pyomo MILP.'
AUTHOR = 'ucstorage developers'
MAINTAINER_EMAIL = ''
LICENSE = 'Revised BSD'
URL = ''

setuptools_kwargs = {
    'zip_safe': False,
    'scripts': [],
    'include_package_data': True,
    'package_data': {'ucstorage': ['models/tests/uc_test_instances/*.csv',
                                   'parsers/tests/csv_test_instances/*.csv']},
    'install_requires': ['pyomo>=6.4', 'numpy', 'pytest', 'pandas',
                         'matplotlib', 'seaborn'],
    'extras_require': {'tests': ['pytest', 'parameterized', 'highspy']},
    'python_requires' : '>=3.7, <4',
}

this_directory = Path(__file__).parent
long_description = (this_directory / 'README.md').read_text()

setup(name=DISTNAME,
      version=VERSION,
      packages=PACKAGES,
      ext_modules=EXTENSIONS,
      description=DESCRIPTION,
      author=AUTHOR,
      maintainer_email=MAINTAINER_EMAIL,
      license=LICENSE,
      long_description=long_description,
      long_description_content_type='text/markdown',
      url=URL,
      **setuptools_kwargs)
