"""Run dbx-introspect as a module."""

# SPDX-FileCopyrightText: 2024 Timeseer.AI
# SPDX-License-Identifier: Apache-2.0

import sys

from dbx_introspect.cli import main

sys.exit(main())
