#!/usr/bin/env python3
"""
AWS Config Switcher

Run the switcher from a checkout without installing it:

    python3 scripts/switch_profile.py            # pick a profile interactively
    python3 scripts/switch_profile.py list
    python3 scripts/switch_profile.py switch staging --atomic
"""

import sys
from pathlib import Path

# Add the parent directory to sys.path to import from awsswitch
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))
from awsswitch.cli import main

if __name__ == "__main__":
    sys.exit(main())
