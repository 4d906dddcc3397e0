"""
evobits Run Package

Configuration and execution of evolutionary runs.

Modules:
    config: Config class, parsed from an INI file or built from defaults
    trial:  Trial class, the generational evolutionary loop

Exported Classes:
    Config: Configuration parameters
    Trial:  One run of the evolutionary loop
"""

from evobits.run.config import Config
from evobits.run.trial  import Trial

__all__ = ['Config',
           'Trial']
