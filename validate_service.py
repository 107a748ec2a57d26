#!/usr/bin/env python3
"""Validate that a service descriptor loads and report its health.

Usage:
    python validate_service.py [identifier]

The identifier defaults to ``github:MediaConduit/chatterbox-service`` and is
resolved against the local checkout in ``SERVICES_DIR``.
"""

from __future__ import annotations

import argparse
import asyncio
import sys
import traceback
from typing import Optional, Sequence

from core.logging import setup_logging
from core.providers.docker.registry import (
    ServiceRegistry,
    get_service_registry,
    is_github_identifier,
    parse_github_identifier,
)

DEFAULT_IDENTIFIER = "github:MediaConduit/chatterbox-service"


async def validate_service(identifier: str, registry: Optional[ServiceRegistry] = None) -> bool:
    """Resolve ``identifier``, print its descriptor fields and current status."""

    print(f"Service validation: {identifier}\n")

    try:
        print("1. Loading service...")
        service = await (registry or get_service_registry()).get_service(identifier)
        print("   ✓ Service loaded")

        print("\n2. Checking service configuration...")
        info = service.get_service_info()
        print(f"   Container: {info.container_name}")
        print(f"   Image: {info.docker_image}")
        print(f"   Ports: {', '.join(str(port) for port in info.ports) or 'none'}")
        print(f"   Health Check: {info.health_check_url}")

        print("\n3. Checking service status...")
        status = await service.get_service_status()
        print(f"   Running: {status.running}")
        print(f"   Health: {status.health}")

        if status.running and status.health != "healthy":
            print("\n   Note: Service may take 2-5 minutes to become healthy")
            print("   Models are downloaded and loaded on first start")
        elif not status.running:
            print(f"\n   Start it with: docker compose -f {info.compose_file} up -d")

        print("\n✅ Service validation complete")
        if is_github_identifier(identifier):
            print(f"Repository: {parse_github_identifier(identifier).repository_url}")
        return True

    except Exception as exc:
        print(f"❌ Validation failed: {exc}")
        traceback.print_exc()
        return False


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Validate a Docker-hosted media service")
    parser.add_argument(
        "identifier",
        nargs="?",
        default=DEFAULT_IDENTIFIER,
        help=f"Service identifier (default: {DEFAULT_IDENTIFIER})",
    )
    args = parser.parse_args(argv)

    setup_logging()
    success = asyncio.run(validate_service(args.identifier))
    return 0 if success else 1


if __name__ == "__main__":
    sys.exit(main())
