"""
Read-only views of the topology: connection records, node ownership and the
local cluster identity.
"""
