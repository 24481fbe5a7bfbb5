"""RoleGuard - hierarchical RBAC with decorated grants and record-level ACL."""

__version__ = "0.1.0"
