# Copyright 2026 Shardnet Contributors
# SPDX-License-Identifier: Apache-2.0

"""Exception types raised by shardnet."""

__all__ = ['ShardnetError', 'ValidationError', 'ConfigError']


class ShardnetError(Exception):
    """Base class for all shardnet errors."""


class ValidationError(ShardnetError, ValueError):
    """An address or bit sequence could not be parsed."""


class ConfigError(ShardnetError, ValueError):
    """A subnet specifier or configuration value is malformed or out of range."""
