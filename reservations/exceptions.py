class ReservationError(Exception):
    def __init__(self, message):
        super().__init__(message)
        self.message = message


# Bad input: slot alignment, operating hours, duration, past start
class ReservationValidationError(ReservationError):
    pass


# Room already taken, or the user already holds a booking that day
class ReservationConflictError(ReservationError):
    pass


# Unknown id, or an id the caller is not allowed to see
class ReservationNotFoundError(ReservationError):
    pass


# Transition not allowed from the current status
class ReservationStateError(ReservationError):
    pass
