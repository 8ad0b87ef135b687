from identity.user.registration import RegisterUser
from identity.user.user import User
from manage import promote_admin
from protean import current_domain


def _register(email):
    return current_domain.process(RegisterUser(email=email, password_hash="hashed"), asynchronous=False)


class TestPromoteAdmin:
    def test_promotes_an_existing_account(self, capsys):
        user_id = _register("owner@sasyamantra.com")

        assert promote_admin("Owner@SasyaMantra.com") is True

        assert current_domain.repository_for(User).get(user_id).is_admin
        assert "is now admin" in capsys.readouterr().out

    def test_revoke(self):
        user_id = _register("owner@sasyamantra.com")
        promote_admin("owner@sasyamantra.com")

        promote_admin("owner@sasyamantra.com", role="user")

        assert not current_domain.repository_for(User).get(user_id).is_admin

    def test_unknown_account(self):
        assert promote_admin("ghost@example.com") is False
