"""Request helpers shared by the API tests."""

import itertools

_counter = itertools.count(1)


def create_company(client, name=None):
    r = client.post("/api/v1/companies", json={"company_name": name or f"Company {next(_counter)}"})
    assert r.status_code == 201, r.text
    return r.json()


def create_department(client, company_id, name="Engineering", description=None):
    payload = {"company_id": company_id, "department_name": name}
    if description is not None:
        payload["description"] = description
    r = client.post("/api/v1/departments", json=payload)
    assert r.status_code == 201, r.text
    return r.json()


def employee_payload(company_id, department_id=None, **overrides):
    n = next(_counter)
    payload = {
        "company_id": company_id,
        "employee_name": f"Employee {n}",
        "email": f"employee{n}@company.com",
        "mobile_number": f"+4915100000{n:03d}",
        "address": "1 Main Street, Springfield",
        "designation": "Developer",
    }
    if department_id is not None:
        payload["department_id"] = department_id
    payload.update(overrides)
    return payload


def create_employee(client, company_id, department_id=None, **overrides):
    r = client.post(
        "/api/v1/employees", json=employee_payload(company_id, department_id, **overrides)
    )
    assert r.status_code == 201, r.text
    return r.json()
