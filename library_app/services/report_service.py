from library_app.repositories.borrow_log_repo import BorrowLogRepo
from library_app.repositories.user_repo import UserRepo


class ReportService:
    @staticmethod
    def list_open_borrows_with_user():
        return [
            {
                "id": log.id,
                "book_id": log.book_id,
                "book_title": log.book_title,
                "borrow_date": log.borrow_date,
                "username": username,
            }
            for log, username in BorrowLogRepo.list_open_with_user()
        ]

    @staticmethod
    def list_logs():
        return [
            {
                "id": log.id,
                "book_title": log.book_title,
                "user": username,
                "borrow_date": log.borrow_date,
                "return_date": log.return_date,
            }
            for log, username in BorrowLogRepo.list_all_with_user()
        ]

    @staticmethod
    def list_users():
        return [{"id": u.id, "username": u.username, "role": u.role} for u in UserRepo.list_all()]
