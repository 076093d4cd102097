"""
Pod Reaper - Kubernetes Pod Remediation Controller

A Python application that periodically scans all pods in a cluster and
deletes those stuck in CrashLoopBackOff or CreateContainerError so that
their owning controllers recreate them.
"""

__version__ = "1.0.0"
__author__ = "Pod Reaper Team"
