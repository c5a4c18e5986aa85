"""Department endpoints, company binding and employee counter."""

import uuid

from helpers import create_company, create_department, create_employee

from ems_api.models import Department


# ==========================================
# CREATE DEPARTMENT TESTS
# ==========================================


class TestCreateDepartment:
    def test_create_returns_201(self, admin):
        company = create_company(admin)
        r = admin.post(
            "/api/v1/departments",
            json={
                "company_id": company["id"],
                "department_name": "Engineering",
                "description": "Builds things",
            },
        )
        assert r.status_code == 201
        data = r.json()
        assert data["company_id"] == company["id"]
        assert data["department_name"] == "Engineering"
        assert data["description"] == "Builds things"
        assert data["number_of_employees"] == 0

    def test_description_is_optional(self, admin):
        company = create_company(admin)
        data = create_department(admin, company["id"])
        assert data["description"] is None

    def test_unknown_company_returns_404(self, admin):
        r = admin.post(
            "/api/v1/departments",
            json={"company_id": str(uuid.uuid4()), "department_name": "Engineering"},
        )
        assert r.status_code == 404
        assert r.json()["code"] == "NOT_FOUND"

    def test_invalid_company_id_returns_422(self, admin):
        r = admin.post(
            "/api/v1/departments",
            json={"company_id": "abc", "department_name": "Engineering"},
        )
        assert r.status_code == 422

    def test_same_name_in_two_companies(self, admin):
        a = create_company(admin)
        b = create_company(admin)
        create_department(admin, a["id"], "Sales")
        create_department(admin, b["id"], "Sales")
        assert len(admin.get("/api/v1/departments").json()) == 2


# ==========================================
# READ DEPARTMENT TESTS
# ==========================================


class TestReadDepartment:
    def test_get_includes_company(self, admin):
        company = create_company(admin, "Acme Corp")
        dept = create_department(admin, company["id"])
        data = admin.get(f"/api/v1/departments/{dept['id']}").json()
        assert data["company"]["id"] == company["id"]
        assert data["company"]["company_name"] == "Acme Corp"

    def test_get_refreshes_employee_counter(self, admin):
        company = create_company(admin)
        dept = create_department(admin, company["id"])
        create_employee(admin, company["id"], dept["id"])
        create_employee(admin, company["id"], dept["id"])
        create_employee(admin, company["id"])
        data = admin.get(f"/api/v1/departments/{dept['id']}").json()
        assert data["number_of_employees"] == 2

    def test_list_refreshes_employee_counter(self, admin):
        company = create_company(admin)
        dept = create_department(admin, company["id"], "Engineering")
        create_department(admin, company["id"], "Finance")
        create_employee(admin, company["id"], dept["id"])
        counts = {d["department_name"]: d["number_of_employees"] for d in admin.get("/api/v1/departments").json()}
        assert counts == {"Engineering": 1, "Finance": 0}

    def _stored_count(self, db_session, department_id):
        db_session.rollback()
        return (
            db_session.query(Department).filter(Department.id == department_id).one().number_of_employees
        )

    def test_stored_counter_lags_until_get(self, admin, db_session):
        company = create_company(admin)
        dept = create_department(admin, company["id"])
        create_employee(admin, company["id"], dept["id"])
        assert self._stored_count(db_session, dept["id"]) == 0

        admin.get(f"/api/v1/departments/{dept['id']}")
        assert self._stored_count(db_session, dept["id"]) == 1

    def test_list_persists_counter(self, admin, db_session):
        company = create_company(admin)
        dept = create_department(admin, company["id"])
        create_employee(admin, company["id"], dept["id"])
        create_employee(admin, company["id"], dept["id"])

        admin.get("/api/v1/departments")
        assert self._stored_count(db_session, dept["id"]) == 2

    def test_list_search(self, admin):
        company = create_company(admin)
        create_department(admin, company["id"], "Engineering")
        create_department(admin, company["id"], "Finance")
        r = admin.get("/api/v1/departments", params={"search": "Eng"})
        assert [d["department_name"] for d in r.json()] == ["Engineering"]

    def test_get_nonexistent_returns_404(self, admin):
        r = admin.get(f"/api/v1/departments/{uuid.uuid4()}")
        assert r.status_code == 404

    def test_list_by_company(self, admin):
        a = create_company(admin)
        b = create_company(admin)
        dept = create_department(admin, a["id"], "Engineering")
        create_department(admin, b["id"], "Finance")
        create_employee(admin, a["id"], dept["id"])
        r = admin.get(f"/api/v1/companies/{a['id']}/departments")
        assert r.status_code == 200
        data = r.json()
        assert [d["department_name"] for d in data] == ["Engineering"]
        assert data[0]["number_of_employees"] == 1

    def test_list_by_unknown_company_returns_404(self, admin):
        r = admin.get(f"/api/v1/companies/{uuid.uuid4()}/departments")
        assert r.status_code == 404


# ==========================================
# UPDATE DEPARTMENT TESTS
# ==========================================


class TestUpdateDepartment:
    def test_update_name_and_description(self, admin):
        company = create_company(admin)
        dept = create_department(admin, company["id"], "Engineering")
        r = admin.patch(
            f"/api/v1/departments/{dept['id']}",
            json={"department_name": "R&D", "description": "Research"},
        )
        assert r.status_code == 200
        assert r.json()["department_name"] == "R&D"
        assert r.json()["description"] == "Research"

    def test_clear_description(self, admin):
        company = create_company(admin)
        dept = create_department(admin, company["id"], description="Temporary")
        r = admin.patch(f"/api/v1/departments/{dept['id']}", json={"description": None})
        assert r.json()["description"] is None

    def test_change_company_returns_400(self, admin):
        a = create_company(admin)
        b = create_company(admin)
        dept = create_department(admin, a["id"])
        r = admin.patch(f"/api/v1/departments/{dept['id']}", json={"company_id": b["id"]})
        assert r.status_code == 400
        assert r.json()["code"] == "BAD_REQUEST"
        assert admin.get(f"/api/v1/departments/{dept['id']}").json()["company_id"] == a["id"]

    def test_same_company_is_allowed(self, admin):
        company = create_company(admin)
        dept = create_department(admin, company["id"])
        r = admin.patch(
            f"/api/v1/departments/{dept['id']}",
            json={"company_id": company["id"], "department_name": "Platform"},
        )
        assert r.status_code == 200
        assert r.json()["department_name"] == "Platform"

    def test_update_nonexistent_returns_404(self, admin):
        r = admin.patch(f"/api/v1/departments/{uuid.uuid4()}", json={"department_name": "Ghost"})
        assert r.status_code == 404


# ==========================================
# DELETE DEPARTMENT TESTS
# ==========================================


class TestDeleteDepartment:
    def test_delete_returns_204(self, admin):
        company = create_company(admin)
        dept = create_department(admin, company["id"])
        assert admin.delete(f"/api/v1/departments/{dept['id']}").status_code == 204
        assert admin.get(f"/api/v1/departments/{dept['id']}").status_code == 404

    def test_delete_nonexistent_returns_404(self, admin):
        assert admin.delete(f"/api/v1/departments/{uuid.uuid4()}").status_code == 404

    def test_delete_keeps_employees_without_department(self, admin):
        company = create_company(admin)
        dept = create_department(admin, company["id"])
        emp = create_employee(admin, company["id"], dept["id"])

        admin.delete(f"/api/v1/departments/{dept['id']}")

        r = admin.get(f"/api/v1/employees/{emp['id']}")
        assert r.status_code == 200
        assert r.json()["department_id"] is None
        assert r.json()["department"] is None
        assert r.json()["company_id"] == company["id"]
