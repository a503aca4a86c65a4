"""
rminspect - robust debug value formatting for logs and diagnostics.
"""
