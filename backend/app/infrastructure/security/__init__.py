"""Security infrastructure package — field-level encryption."""

from .aes_field_cipher import AESFieldCipher

__all__ = ["AESFieldCipher"]
