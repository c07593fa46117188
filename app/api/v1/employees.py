import logging
from fastapi import APIRouter, HTTPException, status
from app.core.errors import NotFoundError, ServiceValidationError
from app.schemas.response import SuccessResponse
from app.schemas.employee import EmployeeRequest, EmployeeResponse, EmployeeUpdate
from app.services.employee_service import add_employee, list_employees, update_employee

log = logging.getLogger("uvicorn")

router = APIRouter()


@router.get("/", response_model=SuccessResponse)
async def list_employees_endpoint():
    try:
        employees = await list_employees()
        return SuccessResponse(
            data=[EmployeeResponse.model_validate(e).model_dump(mode="json") for e in employees]
        )
    except Exception as e:
        log.error(f"Error fetching employees: {e}")
        raise HTTPException(status_code=500, detail="Server failed to fetch employees.")


@router.post("/", status_code=status.HTTP_201_CREATED, response_model=SuccessResponse)
async def add_employee_endpoint(employee_data: EmployeeRequest):
    try:
        employee = await add_employee(**employee_data.model_dump())
        return SuccessResponse(data=EmployeeResponse.model_validate(employee).model_dump(mode="json"))
    except ServiceValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        log.error(f"Error adding employee: {e}")
        raise HTTPException(status_code=500, detail="Server failed to add employee.")


@router.put("/{employee_id}", response_model=SuccessResponse)
async def update_employee_endpoint(employee_id: int, employee_data: EmployeeUpdate):
    try:
        employee = await update_employee(employee_id, **employee_data.model_dump(exclude_unset=True))
        return SuccessResponse(data=EmployeeResponse.model_validate(employee).model_dump(mode="json"))
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ServiceValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        log.error(f"Error updating employee {employee_id}: {e}")
        raise HTTPException(status_code=500, detail="Server failed to update employee.")
