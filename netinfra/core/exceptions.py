# netinfra/core/exceptions.py
"""
Error taxonomy shared by the device integration layer and the services.

RouterConnectionError  cannot reach or authenticate to a device (fatal to the operation)
RouterCommandError     the device rejected one command
EntityNotFoundError    update/remove target does not exist on the device
EntityValidationError  a remote entity is malformed and must be skipped
"""


class NetInfraError(Exception):
    pass


class RouterError(NetInfraError):
    pass


class RouterConnectionError(RouterError):
    pass


class RouterCommandError(RouterError):
    pass


class RouterNotConnectedError(RouterError):
    pass


class EntityNotFoundError(RouterError):
    pass


class EntityValidationError(NetInfraError):
    pass


class DeviceNotFoundError(NetInfraError):
    pass


class UnsupportedDeviceError(NetInfraError):
    pass
