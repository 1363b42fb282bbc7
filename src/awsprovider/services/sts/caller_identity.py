from awsprovider.helpers.logger import get_logger
from awsprovider.sdk.schema import Resource, ResourceData, Schema, ValueType

logger = get_logger(__name__)


def data_source_aws_caller_identity() -> Resource:
    return Resource(
        read=data_source_aws_caller_identity_read,
        schema={
            "account_id": Schema(type=ValueType.STRING, computed=True),
            "arn": Schema(type=ValueType.STRING, computed=True),
            "user_id": Schema(type=ValueType.STRING, computed=True),
        },
    )


def data_source_aws_caller_identity_read(d: ResourceData, meta) -> None:
    logger.debug("Reading Caller Identity")
    identity = meta.get_caller_identity()

    d.set_id(identity["Account"])
    d.set("account_id", identity["Account"])
    d.set("arn", identity["Arn"])
    d.set("user_id", identity["UserId"])
