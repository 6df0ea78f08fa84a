"""HTTP middleware: request ID and correlation ID.

Applied in main app; order matters (last added = outermost).
"""

from cms_admin.middleware.tracing import CorrelationIDMiddleware, RequestIDMiddleware

__all__ = ["CorrelationIDMiddleware", "RequestIDMiddleware"]
