from briklyst.models.user import User
from briklyst.models.storefront import Storefront
from briklyst.models.storefront_settings import StorefrontSettings
from briklyst.models.product import Product
from briklyst.models.click_event import ClickEvent
from briklyst.models.collection import Collection
from briklyst.models.subscriber import Subscriber
from briklyst.models.email_template import EmailTemplate
from briklyst.models.saved_template import SavedTemplate
from briklyst.models.email_campaign import EmailCampaign
