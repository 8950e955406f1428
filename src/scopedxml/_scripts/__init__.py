# SPDX-FileCopyrightText: Copyright scopedxml contributors
# SPDX-License-Identifier: Apache-2.0
"""Commands of the ``python -m scopedxml`` command group."""
