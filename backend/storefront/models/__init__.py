from .tenant import Tenant
from .setting import Setting
from .theme import Theme
from .template import Template
from .content import Content, CONTENT_MODULES
from .page import Page
from .post import Post
from .product import Product, ProductVariant, ProductImage
from .customer import Customer
from .classified import ClassifiedAd, ClassifiedCategory
from .block import Block, FRAGMENT_TYPES
from .stylesheet import Stylesheet
from .redirect import Redirect
from .menu import Menu, MenuItem
