"""
Puppet language plugin for documentation extraction.
"""

from plugins.puppet.plugin import PuppetPlugin

__all__ = ['PuppetPlugin']
