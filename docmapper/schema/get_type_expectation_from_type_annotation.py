from typing import Any

from .get_type_info import get_type_info_list
from .type_expectation import TypeExpectation


def get_type_expectation_from_type_annotation(type_annotation: Any) -> TypeExpectation:
    """ ### Interpret based on type annotations, including nullable types and types with sub-types. ###
    From the annotation, get a list of types. Only `T` and `T | None` are supported.
    """
    expected_type_info_list = list(get_type_info_list(type_annotation))

    is_nullable = False

    # If there's only one type option, the expected_type should be that option
    if len(expected_type_info_list) == 1:
        expected_type_info = expected_type_info_list[0]

    # If there's two type options, check to make sure the Union type is just a nullable type
    elif len(expected_type_info_list) == 2:
        remaining = [type_info for type_info in expected_type_info_list if type_info.type_ is not type(None)]
        if len(remaining) != 1:
            raise ValueError("The only reason we should have multiple annotated types is if one is None.")
        is_nullable = True
        expected_type_info = remaining[0]

    # We can't handle union types with three types.
    else:
        raise NotImplementedError("We don't handle annotations with more than two types.")

    return TypeExpectation(
        type_info=expected_type_info,
        is_nullable=is_nullable
    )
