#--------------------------------------------------------------------------------------#
# Copyright (c) 2026 TWTSField                                                         #
# This file is part of TWTSField.                                                      #
# See README.md for details.                                                           #
#--------------------------------------------------------------------------------------#

import math

from scipy import constants

SPEED_OF_LIGHT_SI = constants.c  # m/s

FS_TO_S = 1.0e-15  # 1 fs in seconds
S_TO_FS = 1.0 / FS_TO_S
UM_TO_M = 1.0e-6  # 1 um in metres
M_TO_UM = 1.0 / UM_TO_M
DEG_TO_RAD = math.pi / 180.0
RAD_TO_DEG = 1.0 / DEG_TO_RAD
