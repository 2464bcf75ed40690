# SPDX-FileCopyrightText: 2026 KDE Community
#
# SPDX-License-Identifier: GPL-3.0-or-later

"""Container creation pipeline: validation, port selection, image, run, readiness.

Importing this package registers all steps with the pipeline.
"""

from ...pipeline import Pipeline
from ..contexts import CreateContext

create_pipeline = Pipeline[CreateContext]("create")

# Import step modules so their decorators register with the pipeline.
# Checks that run before the engine is touched
from . import validate as _  # noqa: F401, E402
from . import select_port as _  # noqa: F401, E402

# Engine-side steps
from . import run_container as _  # noqa: F401, E402
from . import wait_ready as _  # noqa: F401, E402
