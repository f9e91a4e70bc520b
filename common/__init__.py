"""
Shared utilities for the provisioner: command execution, logging,
host probes and the task orchestrator.
"""
