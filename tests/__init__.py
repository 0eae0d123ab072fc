"""
Only the root tests directory is a regular package, so helpers can be imported as
`tests.helpers.<module>`. Test subdirectories stay without __init__.py files, which
means test module names must be unique across the whole tree.
"""
