# SPDX-FileCopyrightText: 2026 KDE Community
#
# SPDX-License-Identifier: GPL-3.0-or-later

"""PostgreSQL container management: create pipeline, lifecycle service, results."""
