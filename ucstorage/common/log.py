#  ___________________________________________________________________________
#
#  EGRET: Electrical Grid Research and Engineering Tools
#  Copyright 2019 National Technology & Engineering Solutions of Sandia, LLC
#  (NTESS). Under the terms of Contract DE-NA0003525 with NTESS, the U.S.
#  Government retains certain rights in this software.
#  This software is distributed under the Revised BSD License.
#  ___________________________________________________________________________

"""
Logging configuration for ucstorage.

Importing this module sets up the ``ucstorage`` logger: level INFO, one
handler writing the bare message to stdout. Modules that report progress
(model construction, solve summaries, input warnings) import the logger
directly

.. code-block:: python

   from ucstorage.common.log import logger
   logger.info('Built unit commitment model with storage')

Input data at a bound of its range (e.g., a storage unit that starts empty)
is reported at the warning level. To silence the solve summaries, raise the
level of the ``ucstorage`` logger

.. code-block:: python

   import logging
   logging.getLogger('ucstorage').setLevel(logging.WARNING)

"""
import sys
import logging
log_format = '%(message)s'

# configure the root logger for ucstorage
logger = logging.getLogger('ucstorage')
logger.setLevel(logging.INFO)

if not logger.handlers:
    console_handler = logging.StreamHandler(sys.stdout)
    fmtr = logging.Formatter(log_format)
    console_handler.setFormatter(fmtr)
    logger.addHandler(console_handler)
