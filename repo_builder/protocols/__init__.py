"""
Protocols and abstract base classes for type safety.

This package provides protocols that define the interfaces of the
external collaborators used by the repository pipeline.
"""

from .command_protocol import CommandRunnerProtocol, IndexPageBuilderProtocol, SignerProtocol

__all__ = ["CommandRunnerProtocol", "SignerProtocol", "IndexPageBuilderProtocol"]
