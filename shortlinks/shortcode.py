"""Short code generation utilities."""

import logging
import random
import string
import uuid
from typing import Callable, Optional

from .common.validators import validate_custom_code
from .errors import CodeGenerationError, CodeTakenError


class ShortCodeGenerator:
    """Generate short codes that are not yet present in a table."""

    # Base62 characters (alphanumeric, case-sensitive)
    BASE62_CHARS = string.ascii_letters + string.digits  # a-zA-Z0-9

    def __init__(
        self,
        default_length: int = 6,
        max_collision_retries: int = 10,
        widen_by: int = 2,
        rng: Optional[random.Random] = None,
        logger: Optional[logging.Logger] = None,
    ):
        """Initialize short code generator.

        Args:
            default_length: Length for generated codes
            max_collision_retries: Draws per length before falling back
            widen_by: Extra characters used once the default length keeps colliding
            rng: Optional random source (non-cryptographic)
            logger: Optional logger
        """
        self.default_length = default_length
        self.max_collision_retries = max_collision_retries
        self.widen_by = widen_by
        self.rng = rng or random.Random()
        self.logger = logger or logging.getLogger(__name__)

    def generate_random(self, length: Optional[int] = None) -> str:
        """Generate a random short code.

        Args:
            length: Length of the code (uses default if not specified)

        Returns:
            Random short code
        """
        length = length or self.default_length
        return ''.join(self.rng.choices(self.BASE62_CHARS, k=length))

    def generate_from_uuid(self, length: Optional[int] = None) -> str:
        """Generate short code from UUID.

        Args:
            length: Length of the code (uses default if not specified)

        Returns:
            Short code based on UUID
        """
        length = length or self.default_length
        code = self._int_to_base62(uuid.uuid4().int)
        return code[:length]

    def generate(
        self,
        exists: Callable[[str], bool],
        custom_code: Optional[str] = None,
    ) -> str:
        """Pick a short code that ``exists`` reports as free.

        Custom codes are validated and returned verbatim. Otherwise random
        codes are drawn at the default length, then at a widened length, and
        finally from a UUID.

        Args:
            exists: Predicate telling whether a code is already taken
            custom_code: Optional caller-supplied code

        Returns:
            A short code absent from the table

        Raises:
            InvalidFormatError: Custom code is not alphanumeric
            InvalidLengthError: Custom code length out of range
            CodeTakenError: Custom code already in use
            CodeGenerationError: No free code found
        """
        if custom_code:
            validate_custom_code(custom_code)
            if exists(custom_code):
                raise CodeTakenError(f"Custom short code '{custom_code}' already exists")
            return custom_code

        for length in (self.default_length, self.default_length + self.widen_by):
            for attempt in range(self.max_collision_retries):
                code = self.generate_random(length)
                if not exists(code):
                    if attempt or length != self.default_length:
                        self.logger.debug(
                            f"Generated code after {attempt + 1} attempts at length {length}: {code}"
                        )
                    return code
            self.logger.warning(
                f"Short code space crowded: {self.max_collision_retries} collisions at length {length}"
            )

        # Last resort: UUID-based code (highly unlikely to collide)
        code = self.generate_from_uuid(length=max(8, self.default_length + 2 * self.widen_by))
        if not exists(code):
            return code

        raise CodeGenerationError("Unable to generate unique short code after multiple attempts")

    def _int_to_base62(self, num: int) -> str:
        """Convert integer to base62 string."""
        if num == 0:
            return self.BASE62_CHARS[0]

        result = []
        base = len(self.BASE62_CHARS)

        while num > 0:
            num, remainder = divmod(num, base)
            result.append(self.BASE62_CHARS[remainder])

        return ''.join(reversed(result))
