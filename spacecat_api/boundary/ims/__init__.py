"""
IMS boundary module.

Exports: ImsClient, ImsError
"""

from .ims_client import ImsClient, ImsError

__all__ = ["ImsClient", "ImsError"]
