from src.platform.types.uuid7_utils_types import UtilsUUID7, to_std_uuid, to_uuid7

__all__ = ['UtilsUUID7', 'to_std_uuid', 'to_uuid7']
