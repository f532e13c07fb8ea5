#!/usr/bin/env python3
"""
client.py
---------
Low-level DynamoDB client construction.

The low-level client is used (not the resource API) so items keep their
typed attribute-value form end to end: maps stay distinguishable from
other containers, and values read during the scan are passed back into
the write condition unchanged.
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from typing import Any, Optional

# --- Third party imports ---
import boto3
from botocore.config import Config


def make_client(
    region: Optional[str] = None,
    profile: Optional[str] = None,
    timeout: Optional[int] = None,
) -> Any:
    """
    Build a DynamoDB client from the default credential chain.

    Args:
        region: Region override (default: environment/profile region)
        profile: Named credentials profile
        timeout: Connect and read timeout in seconds

    Returns:
        A botocore DynamoDB client
    """
    session = boto3.session.Session(profile_name=profile, region_name=region)

    config = None
    if timeout is not None:
        config = Config(connect_timeout=timeout, read_timeout=timeout)

    return session.client("dynamodb", config=config)
