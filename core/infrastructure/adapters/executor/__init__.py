from .grpc_executor_client import GrpcExecutorClient

__all__ = ["GrpcExecutorClient"]
