"""friendgraph — social-graph analytics over friendships and group memberships."""

__version__ = "0.1.0"
