import pytest


@pytest.fixture
def valid_values():
    return {
        "nome": "Jo",
        "email": "jo@x.com",
        "telefone": "(11) 98888-7777",
        "senha": "Abcde1",
        "confirmarSenha": "Abcde1",
    }


class FakeScheduler:
    def __init__(self):
        self.calls = []

    def __call__(self, delay, callback):
        self.calls.append((delay, callback))

    def fire(self, index=-1):
        _, callback = self.calls[index]
        callback()


@pytest.fixture
def scheduler():
    return FakeScheduler()
