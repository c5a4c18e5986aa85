"""Employee management REST API: companies, departments and employees."""
