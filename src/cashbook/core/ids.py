#!/usr/bin/env python3
"""Record id generation."""

import time
import uuid


def new_record_id() -> str:
    """Generate a unique, roughly time-ordered record id."""
    return f"{int(time.time() * 1000)}{uuid.uuid4().hex[:7]}"
