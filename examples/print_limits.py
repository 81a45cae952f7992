#!/usr/bin/env python3
"""Print the limits of the current container as KEY=VALUE lines."""

from container_limits import detect_limits

limits = detect_limits()
print(f"Memory limit: {limits.memory_limit_in_bytes or 'unknown'} bytes")
print(f"Usable cores: {limits.number_of_cores or 'unknown'}")
print(f"Unlimited memory: {limits.no_memory_limit}")
for key, value in limits.as_environment().items():
    print(f"{key}={value}")
