"""
Protobuf message classes for loan.proto, built at import time from a
FileDescriptorProto so no protoc step is needed. Keep the field lists in
step with loan.proto; tests/rpc/test_loan_grpc.py compares the two.
"""
from google.protobuf import descriptor_pb2, descriptor_pool, message_factory

PACKAGE = "loan"
SERVICE_NAME = f"{PACKAGE}.LoanService"

_Field = descriptor_pb2.FieldDescriptorProto
STRING = _Field.TYPE_STRING
DOUBLE = _Field.TYPE_DOUBLE
BOOL = _Field.TYPE_BOOL
MESSAGE = _Field.TYPE_MESSAGE

_LOAN_FIELDS = [
    ("name", STRING),
    ("email", STRING),
    ("account_type", STRING),
    ("account_number", STRING),
    ("govt_id_type", STRING),
    ("govt_id_number", STRING),
    ("loan_type", STRING),
    ("loan_amount", DOUBLE),
    ("interest_rate", DOUBLE),
    ("time_period", STRING),
]

# message name -> [(field name, type[, message type, repeated])], numbered from 1
MESSAGES = {
    "LoanRequest": _LOAN_FIELDS,
    "LoanResponse": [("approved", BOOL), ("message", STRING)],
    "LoansHistoryRequest": [("email", STRING)],
    "Loan": _LOAN_FIELDS + [("status", STRING), ("timestamp", STRING)],
    "LoansHistoryResponse": [("loans", MESSAGE, "Loan", True)],
}

METHODS = {
    "ProcessLoanRequest": ("LoanRequest", "LoanResponse"),
    "GetLoanHistory": ("LoansHistoryRequest", "LoansHistoryResponse"),
}


def _file_descriptor_proto() -> descriptor_pb2.FileDescriptorProto:
    file_proto = descriptor_pb2.FileDescriptorProto(name="loan.proto", package=PACKAGE, syntax="proto3")
    for message_name, fields in MESSAGES.items():
        message = file_proto.message_type.add(name=message_name)
        for number, field_def in enumerate(fields, start=1):
            field_name, field_type = field_def[0], field_def[1]
            field = message.field.add(name=field_name, number=number, type=field_type, json_name=_camel(field_name))
            field.label = _Field.LABEL_REPEATED if len(field_def) > 3 and field_def[3] else _Field.LABEL_OPTIONAL
            if field_type == MESSAGE:
                field.type_name = f".{PACKAGE}.{field_def[2]}"

    service = file_proto.service.add(name="LoanService")
    for method_name, (request_type, response_type) in METHODS.items():
        service.method.add(
            name=method_name,
            input_type=f".{PACKAGE}.{request_type}",
            output_type=f".{PACKAGE}.{response_type}",
        )
    return file_proto


def _camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.title() for part in rest)


_pool = descriptor_pool.DescriptorPool()
_pool.AddSerializedFile(_file_descriptor_proto().SerializeToString())
DESCRIPTOR = _pool.FindFileByName("loan.proto")


def _message_class(name: str):
    return message_factory.GetMessageClass(_pool.FindMessageTypeByName(f"{PACKAGE}.{name}"))


LoanRequest = _message_class("LoanRequest")
LoanResponse = _message_class("LoanResponse")
LoansHistoryRequest = _message_class("LoansHistoryRequest")
Loan = _message_class("Loan")
LoansHistoryResponse = _message_class("LoansHistoryResponse")
