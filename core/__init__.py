"""core/ -- Kernel: configuration and runtime schema checks.

Layer rule: core/ imports only stdlib and third-party libraries. Every other
package may import from core/; core/ imports from none of them.
"""
