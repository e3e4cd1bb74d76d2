#
# Copyright 2024 skillzpost Project Authors. All rights reserved.
# Use of this source code is governed by a MIT-style
# license that can be found at
#
# https://opensource.org/license/MIT
#
# The above copyright notice and this permission
# notice shall be included in all copies or
# substantial portions of the Software.

"""Console logging with severity prefixes."""

import sys

WARNING_PREFIX = "⚠️  Warning: "
ERROR_PREFIX = "ERROR: "


def log_info(msg):
    print(msg, file=sys.stdout)


def log_warning(msg):
    print(f"{WARNING_PREFIX}{msg}", file=sys.stdout)


def log_error(msg):
    print(f"{ERROR_PREFIX}{msg}", file=sys.stderr)
