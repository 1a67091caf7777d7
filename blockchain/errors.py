"""
Deployment errors
"""


class DeploymentError(Exception):
    """Raised when a contract cannot be deployed"""
