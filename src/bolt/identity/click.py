from click import ParamType, Context, Parameter
from typing import Any

from .types import Nickname, InvalidNicknameError
from .key_pair import validate_nickname


class NicknameParamType(ParamType):
    name = "nickname"

    def convert(self, value: Any, param: Parameter | None, ctx: Context | None) -> Nickname:
        try:
            assert isinstance(value, str), f"Expected a string value, got {type(value).__name__}"
            return validate_nickname(value)
        except (AssertionError, InvalidNicknameError) as e:
            self.fail(
                f"{e}",
                param,
                ctx,
            )


NICKNAME = NicknameParamType()
