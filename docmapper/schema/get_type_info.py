from types import UnionType
from typing import Annotated, Any, Union, get_args, get_origin

from .type_info import TypeInfo


def get_type_info(type_: Any) -> TypeInfo:
    """ Extracts type and subtype (if present) for a **single** (non-Union) type. """
    origin = get_origin(type_)

    if origin is Annotated:
        # Annotated[list, SomeAnnotation] describes a list
        base_type = get_args(type_)[0]
        return get_type_info(base_type)
    elif origin in {Union, UnionType}:
        raise ValueError("This function should only be used for single types.")
    elif origin is dict:
        # For now, we don't store any sub type information for a dict
        return TypeInfo(
            type_=dict,
            sub_type=None
        )
    elif origin is None:
        if type_ is not Any and not isinstance(type_, type):
            raise ValueError(f"'{type_!r}' is not a type annotation.")
        return TypeInfo(
            type_=type_,
            sub_type=None
        )
    else:
        # Handle generic types that have a single type parameter (list, set, frozenset, ...)
        args = get_args(type_)
        if not args:
            raise ValueError("Unable to get type info for type annotation with 'other' origin but no type arguments.")
        if len(args) != 1:
            raise ValueError("Unable to get type info for type annotation with 'other' origin and more than one type argument.")
        return TypeInfo(
            type_=origin,
            sub_type=args[0]
        )


def get_type_info_list(type_annotation: Any) -> list[TypeInfo]:
    """ Take in a type_annotation (or type) and returns a list of the TypeInfos contained within it.

    For Unioned types, returns multiple TypeInfos. For non-Unioned types, returns a single TypeInfo.
    """
    origin = get_origin(type_annotation)

    if origin is Annotated:
        base_type = get_args(type_annotation)[0]
        return get_type_info_list(base_type)

    # For union types, return TypeInfo for each unioned type
    elif origin in {Union, UnionType}:
        return [get_type_info(unioned_type) for unioned_type in get_args(type_annotation)]

    else:
        return [get_type_info(type_annotation)]
