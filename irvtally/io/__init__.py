"""Input/output of ballot files.

This subpackage is structured into modules by file format. Loaders return
raw ballot records in a :class:`core.VotingSetup`; validation is left to
:mod:`irvtally.convert`.
"""
