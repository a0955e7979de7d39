"""
Integer kernels.

Small, auditable, integer-only helpers shared by the pricing and liquidity code.
"""
