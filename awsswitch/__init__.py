"""
awsswitch: keep AWS config profiles as directories and promote one of them
to the live ~/.aws configuration.
"""

__version__ = "0.1.0"
