import logging

import colorlog

from config.form import FormConfig
from registration.form import RegistrationForm
from registration.validator import RegistrationValidator


def setup_logging(level: str = "INFO") -> None:
    logger = logging.getLogger()
    for h in list(logger.handlers):
        logger.removeHandler(h)
    log_format = "%(asctime)s:%(levelname)s:%(name)s: %(message)s"
    log_colors = {
        "DEBUG": "cyan",
        "INFO": "green",
        "WARNING": "yellow",
        "ERROR": "red",
        "CRITICAL": "bold_red",
    }
    stream_handler = colorlog.StreamHandler()
    formatter = colorlog.ColoredFormatter(f"%(log_color)s{log_format}", log_colors=log_colors)
    stream_handler.setFormatter(formatter)
    logger.addHandler(stream_handler)
    logger.setLevel(getattr(logging, level, logging.INFO))


def main():
    attempts = [
        {"nome": "", "email": "bad", "telefone": "123", "senha": "abc", "confirmarSenha": "xyz"},
        {
            "nome": "Jo",
            "email": "jo@x.com",
            "telefone": "(11) 98888-7777",
            "senha": "Abcde1",
            "confirmarSenha": "Abcde1",
        },
    ]

    config = FormConfig.from_env()
    setup_logging(config.log_level)

    form = RegistrationForm(validator=RegistrationValidator(), config=config)

    for i, attempt in enumerate(attempts, 1):
        for field, value in attempt.items():
            form.edit(field, value)

        outcome = form.submit()
        print(f"\nSUBMIT #{i}: {outcome.kind}")
        print("phase:", form.phase.value)
        print("errors:", form.errors)
        print("success:", form.success, form.success_message or "")

    print("\nValues after last submit:", form.values)


if __name__ == "__main__":
    main()
