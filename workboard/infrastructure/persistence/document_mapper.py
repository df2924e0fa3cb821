"""
Mapper for converting between board entities and stored documents.

The stored form is a JSON array of ``{docId, docType, data}`` documents with
camelCase field names and ISO calendar dates, matching what the board has
always kept in local storage.
"""

from datetime import date
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

from workboard.domain.scheduling.entities.work_center import WorkCenter
from workboard.domain.scheduling.entities.work_order import WorkOrder
from workboard.domain.scheduling.value_objects.enums import WorkOrderStatus


class WorkCenterData(BaseModel):
    name: str = Field(min_length=1)


class WorkCenterDocument(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    doc_id: str = Field(alias="docId", min_length=1)
    doc_type: Literal["workCenter"] = Field(default="workCenter", alias="docType")
    data: WorkCenterData


class WorkOrderData(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(min_length=1)
    work_center_id: str = Field(alias="workCenterId", min_length=1)
    status: WorkOrderStatus
    start_date: date = Field(alias="startDate")
    end_date: date = Field(alias="endDate")


class WorkOrderDocument(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    doc_id: str = Field(alias="docId", min_length=1)
    doc_type: Literal["workOrder"] = Field(default="workOrder", alias="docType")
    data: WorkOrderData


_work_center_documents = TypeAdapter(list[WorkCenterDocument])
_work_order_documents = TypeAdapter(list[WorkOrderDocument])


class DocumentMapper:
    """
    Converts board entities to and from stored documents.

    The ``*_from_json`` methods raise ``pydantic.ValidationError`` for
    malformed JSON, wrong document shapes and invalid field values alike, so
    callers have a single failure to handle.
    """

    @staticmethod
    def work_center_to_document(work_center: WorkCenter) -> WorkCenterDocument:
        return WorkCenterDocument(
            doc_id=work_center.id, data=WorkCenterData(name=work_center.name)
        )

    @staticmethod
    def work_center_from_document(document: WorkCenterDocument) -> WorkCenter:
        return WorkCenter(id=document.doc_id, name=document.data.name)

    @staticmethod
    def work_order_to_document(work_order: WorkOrder) -> WorkOrderDocument:
        return WorkOrderDocument(
            doc_id=work_order.id,
            data=WorkOrderData(
                name=work_order.name,
                work_center_id=work_order.work_center_id,
                status=work_order.status,
                start_date=work_order.start_date,
                end_date=work_order.end_date,
            ),
        )

    @staticmethod
    def work_order_from_document(document: WorkOrderDocument) -> WorkOrder:
        data = document.data
        return WorkOrder(
            id=document.doc_id,
            work_center_id=data.work_center_id,
            name=data.name,
            status=data.status,
            start_date=data.start_date,
            end_date=data.end_date,
        )

    @classmethod
    def work_centers_to_json(cls, work_centers: tuple[WorkCenter, ...]) -> str:
        documents = [cls.work_center_to_document(wc) for wc in work_centers]
        return _work_center_documents.dump_json(documents, by_alias=True).decode()

    @classmethod
    def work_centers_from_json(cls, raw: str) -> tuple[WorkCenter, ...]:
        documents = _work_center_documents.validate_json(raw)
        return tuple(cls.work_center_from_document(doc) for doc in documents)

    @classmethod
    def work_orders_to_json(cls, work_orders: tuple[WorkOrder, ...]) -> str:
        documents = [cls.work_order_to_document(wo) for wo in work_orders]
        return _work_order_documents.dump_json(documents, by_alias=True).decode()

    @classmethod
    def work_orders_from_json(cls, raw: str) -> tuple[WorkOrder, ...]:
        documents = _work_order_documents.validate_json(raw)
        return tuple(cls.work_order_from_document(doc) for doc in documents)
